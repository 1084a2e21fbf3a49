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
"""E2E environment, loaded from SERVCTL_E2E_* environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from servctl_e2e.constants import (
    DEFAULT_CLI_BINARY,
    DEFAULT_KUBECTL_BINARY,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
)

ENV_PREFIX = "SERVCTL_E2E_"


class E2EEnv(BaseSettings):
    """Test environment supplied by whoever provisions the cluster.

    Attributes:
        namespace: Namespace every scenario runs in.
        cli_binary: Path or name of the servctl binary under test.
        kubectl_binary: Path or name of kubectl.
        build_git_url: Git repository of the sample app.
        build_git_revision_v1: Revision serving the v1 content.
        build_git_revision_v2: Revision serving the v2 content.
        build_public_image: Image URL pushed to a public repository.
        build_private_image: Image URL pushed to a private repository.
        build_docker_username: Registry username.
        build_docker_password: Registry password.
        poll_timeout_seconds: Convergence deadline.
        poll_interval_seconds: Wait between convergence attempts.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    namespace: str = ""
    cli_binary: str = DEFAULT_CLI_BINARY
    kubectl_binary: str = DEFAULT_KUBECTL_BINARY
    build_git_url: str = ""
    build_git_revision_v1: str = ""
    build_git_revision_v2: str = ""
    build_public_image: str = ""
    build_private_image: str = ""
    build_docker_username: str = ""
    build_docker_password: str = ""
    poll_timeout_seconds: float = Field(default=DEFAULT_POLL_TIMEOUT_SECONDS, gt=0)
    poll_interval_seconds: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, gt=0)

    def missing(self, *names: str) -> list[str]:
        """Return the env var names of the given fields that are empty."""
        return [f"{ENV_PREFIX}{name.upper()}" for name in names if not getattr(self, name)]

    def require(self, *names: str) -> None:
        """Check that the given fields are set.

        Raises:
            RuntimeError: Naming every missing environment variable.
        """
        missing = self.missing(*names)
        if missing:
            raise RuntimeError(f"Expected non-empty environment variables: {', '.join(missing)}")
