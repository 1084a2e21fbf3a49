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

"""Flag schema: flag specs and the flag groups commands are built from.

A flag group is a plain dataclass. Each leaf field is declared with
:func:`flag`, which stores a :class:`FlagSpec` in the field metadata. Groups
nest, so ``ServiceFlags`` carries a ``NamespaceFlags`` alongside its own name.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, List, Optional

import typer

from servctl.constants import ENV_VAR_PATTERN, FLAG_METADATA_KEY


class Multiplicity(str, enum.Enum):
    """How many times a flag may appear on the command line."""

    SINGLE = "single"
    REPEATED = "repeated"


@dataclass(frozen=True)
class FlagSpec:
    """Description of one bindable command-line input.

    Attributes:
        name: Long flag name without dashes (e.g. ``namespace``).
        shorthand: Single-letter alias without dash, or None.
        required: Whether the flag must be supplied.
        multiplicity: Single value or repeated, order-preserving values.
        help: Help text shown in ``--help``.
        is_switch: Whether the flag is a boolean on/off switch.
        pattern: Regex every supplied value must fully match, or None.
    """

    name: str
    shorthand: str | None = None
    required: bool = False
    multiplicity: Multiplicity = Multiplicity.SINGLE
    help: str = ""
    is_switch: bool = False
    pattern: str | None = None

    def __post_init__(self) -> None:
        if self.shorthand is not None and len(self.shorthand) != 1:
            raise ValueError(f"Flag '{self.name}' shorthand must be one letter, got '{self.shorthand}'")
        if self.is_switch and (self.required or self.multiplicity is Multiplicity.REPEATED):
            raise ValueError(f"Switch flag '{self.name}' cannot be required or repeated")

    @property
    def repeated(self) -> bool:
        return self.multiplicity is Multiplicity.REPEATED

    @property
    def param_name(self) -> str:
        """Python identifier used for the generated callback parameter."""
        return self.name.replace("-", "_")

    def option_decls(self) -> list[str]:
        decls = [f"--{self.name}"]
        if self.shorthand:
            decls.append(f"-{self.shorthand}")
        return decls

    def annotation(self) -> Any:
        if self.is_switch:
            return bool
        if self.repeated:
            return Optional[List[str]]
        return Optional[str]

    def typer_option(self) -> Any:
        """Build the typer option declaration for this flag.

        Non-switch flags default to None so the command can tell "absent"
        apart from "empty"; required checking happens after parsing.
        """
        default = False if self.is_switch else None
        return typer.Option(default, *self.option_decls(), help=self.help, show_default=False)


def flag(
    name: str,
    shorthand: str | None = None,
    *,
    required: bool = False,
    repeated: bool = False,
    switch: bool = False,
    help: str = "",
    pattern: str | None = None,
) -> Any:
    """Declare a dataclass field bound to a command-line flag.

    Args:
        name: Long flag name without dashes.
        shorthand: Single-letter alias, or None.
        required: Whether the flag must be supplied.
        repeated: Whether the flag may be given several times.
        switch: Whether the flag is a boolean switch.
        help: Help text.
        pattern: Regex each supplied value must fully match.

    Returns:
        A ``dataclasses.field`` carrying the FlagSpec in its metadata.
    """
    spec = FlagSpec(
        name=name,
        shorthand=shorthand,
        required=required,
        multiplicity=Multiplicity.REPEATED if repeated else Multiplicity.SINGLE,
        help=help,
        is_switch=switch,
        pattern=pattern,
    )
    metadata = {FLAG_METADATA_KEY: spec}
    if repeated:
        return field(default_factory=list, metadata=metadata)
    if switch:
        return field(default=False, metadata=metadata)
    return field(default="", metadata=metadata)


@dataclass
class BoundFlag:
    """A FlagSpec together with the options object field it writes to."""

    spec: FlagSpec
    owner: Any
    attr: str

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attr, value)

    def get(self) -> Any:
        return getattr(self.owner, self.attr)


def iter_flags(options: Any) -> Iterator[BoundFlag]:
    """Walk an options dataclass depth-first in field declaration order.

    Args:
        options: Options dataclass instance, possibly nesting flag groups.

    Yields:
        One BoundFlag per flag-bearing leaf field.
    """
    for fld in dataclasses.fields(options):
        spec = fld.metadata.get(FLAG_METADATA_KEY)
        if spec is not None:
            yield BoundFlag(spec=spec, owner=options, attr=fld.name)
            continue
        value = getattr(options, fld.name)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            yield from iter_flags(value)


# ============================================================================
# Flag groups
# ============================================================================

@dataclass
class NamespaceFlags:
    name: str = flag("namespace", "n", required=True, help="Specified namespace")


@dataclass
class OptionalNamespaceFlags:
    name: str = flag("namespace", "n", help="Specified namespace (all namespaces if empty)")


@dataclass
class ServiceFlags:
    namespace: NamespaceFlags = field(default_factory=NamespaceFlags)
    name: str = flag("service", "s", required=True, help="Specified service")


@dataclass
class SecretFlags:
    namespace: NamespaceFlags = field(default_factory=NamespaceFlags)
    name: str = flag("secret", "s", required=True, help="Specified secret")


@dataclass
class ServiceAccountFlags:
    namespace: NamespaceFlags = field(default_factory=NamespaceFlags)
    name: str = flag("service-account", "a", required=True, help="Specified service account")


@dataclass
class ServiceAccountCreateFlags:
    """Secrets attached to a new service account, in command-line order."""

    secrets: list[str] = flag("secret", "s", repeated=True, help="Set secret (can be specified multiple times)")
    image_pull_secrets: list[str] = flag(
        "pull-secret", "p", repeated=True, help="Set image pull secret (can be specified multiple times)")


@dataclass
class BasicAuthSecretCreateFlags:
    """Registry credentials for a basic-auth secret."""

    docker_hub: bool = flag("docker-hub", switch=True, help="Preconfigure type and URL for Docker Hub registry")
    gcr: bool = flag("gcr", switch=True, help="Preconfigure type and URL for gcr.io registry")
    type: str = flag("type", help="Set type (eg. 'docker', 'git')")
    url: str = flag("url", help="Set URL")
    username: str = flag("username", "u", help="Set username")
    password: str = flag("password", "p", help="Set password")
    for_pull: bool = flag("for-pull", switch=True, help="Create a docker-registry secret usable as an image pull secret")


@dataclass
class BuildSourceFlags:
    git_url: str = flag("git-url", help="Set Git URL to build from")
    git_revision: str = flag("git-revision", help="Set Git revision (branch, tag or commit)")
    service_account: str = flag("service-account", help="Set service account name used by the build")


@dataclass
class DeployFlags:
    """Image and environment of a service revision."""

    image: str = flag("image", "i", help="Set image URL")
    env: list[str] = flag(
        "env", "e", repeated=True, pattern=ENV_VAR_PATTERN,
        help="Set environment variable (format: KEY=VALUE) (can be specified multiple times)")


@dataclass
class OutputFlags:
    json: bool = flag("json", switch=True, help="Output as JSON")
