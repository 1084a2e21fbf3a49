# /*
# Copyright 2026 The Servctl Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Value types exchanged between commands and backends."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class ServiceSpec:
    """Desired state of a service revision.

    Attributes:
        image: Container image URL.
        env: Ordered ``(key, value)`` environment pairs.
        git_url: Git repository to build from, or empty.
        git_revision: Git revision to build, or empty.
        service_account: Service account the build and revision run as, or empty.
    """

    image: str = ""
    env: tuple[tuple[str, str], ...] = ()
    git_url: str = ""
    git_revision: str = ""
    service_account: str = ""


@dataclass(frozen=True)
class ServiceInfo:
    """Observed state of a service, as listed by ``list services``."""

    name: str
    namespace: str
    url: str = ""
    ready: bool = False
    latest_revision: str = ""
    annotations: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BasicAuthSecret:
    """Registry or Git credentials stored as a secret."""

    url: str
    type: str = ""
    username: str = ""
    password: str = ""
    for_pull: bool = False


def parse_env(pairs: list[str]) -> tuple[tuple[str, str], ...]:
    """Split ``KEY=VALUE`` strings, keeping their order.

    Args:
        pairs: Values of repeated ``--env`` flags, already validated.

    Returns:
        Tuple of ``(key, value)`` pairs.
    """
    return tuple(tuple(pair.split("=", 1)) for pair in pairs)
