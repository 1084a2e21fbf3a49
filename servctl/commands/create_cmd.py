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

"""Create subcommands (service-account, basic-auth-secret)."""

from __future__ import annotations

from dataclasses import dataclass, field

import typer

from servctl import console
from servctl.command import Command
from servctl.constants import DEFAULT_SECRET_TYPE, DOCKER_HUB_URL, GCR_URL
from servctl.deps import DependencyFactory
from servctl.errors import ValidationError
from servctl.flags import (
    BasicAuthSecretCreateFlags,
    SecretFlags,
    ServiceAccountCreateFlags,
    ServiceAccountFlags,
)
from servctl.models import BasicAuthSecret


# ============================================================================
# create service-account
# ============================================================================

@dataclass
class CreateServiceAccountOptions:
    service_account_flags: ServiceAccountFlags = field(default_factory=ServiceAccountFlags)
    service_account_create_flags: ServiceAccountCreateFlags = field(default_factory=ServiceAccountCreateFlags)


def run_create_service_account(opts: CreateServiceAccountOptions, deps: DependencyFactory) -> None:
    """Create a service account referencing secrets in the given order."""
    namespace = opts.service_account_flags.namespace.name
    name = opts.service_account_flags.name
    deps.core_client().create_service_account(
        namespace,
        name,
        opts.service_account_create_flags.secrets,
        opts.service_account_create_flags.image_pull_secrets,
    )
    console.print(f"[green]\u2705 Service account '{name}' created in namespace '{namespace}'[/green]")


def new_create_service_account_cmd(deps_factory: DependencyFactory) -> Command[CreateServiceAccountOptions]:
    return Command(
        "service-account",
        CreateServiceAccountOptions(),
        run_create_service_account,
        deps_factory,
        help="Create service account.",
    )


# ============================================================================
# create basic-auth-secret
# ============================================================================

@dataclass
class CreateBasicAuthSecretOptions:
    secret_flags: SecretFlags = field(default_factory=SecretFlags)
    create_flags: BasicAuthSecretCreateFlags = field(default_factory=BasicAuthSecretCreateFlags)

    def validate(self) -> None:
        """Reject conflicting presets and a missing type/URL before execution."""
        resolve_basic_auth_secret(self.create_flags)


def resolve_basic_auth_secret(flags: BasicAuthSecretCreateFlags) -> BasicAuthSecret:
    """Apply registry presets and check the resulting type/URL pair.

    Args:
        flags: Parsed basic-auth-secret flags.

    Returns:
        The credentials to store.

    Raises:
        ValidationError: If presets conflict or type/URL are missing.
    """
    secret_type, url = flags.type, flags.url
    if flags.docker_hub and flags.gcr:
        raise ValidationError(invalid=[("gcr", "true", "cannot be combined with --docker-hub")])
    if flags.docker_hub or flags.gcr:
        if secret_type or url:
            preset = "docker-hub" if flags.docker_hub else "gcr"
            raise ValidationError(invalid=[(preset, "true", "cannot be combined with --type or --url")])
        secret_type, url = DEFAULT_SECRET_TYPE, DOCKER_HUB_URL if flags.docker_hub else GCR_URL

    missing = [name for name, value in (("type", secret_type), ("url", url)) if not value]
    if missing:
        raise ValidationError(missing=missing)

    return BasicAuthSecret(
        url=url,
        type=secret_type,
        username=flags.username,
        password=flags.password,
        for_pull=flags.for_pull,
    )


def run_create_basic_auth_secret(opts: CreateBasicAuthSecretOptions, deps: DependencyFactory) -> None:
    """Create a basic-auth (or image pull) secret."""
    namespace = opts.secret_flags.namespace.name
    name = opts.secret_flags.name
    secret = resolve_basic_auth_secret(opts.create_flags)
    deps.core_client().create_basic_auth_secret(namespace, name, secret)
    console.print(f"[green]\u2705 Secret '{name}' created in namespace '{namespace}'[/green]")


def new_create_basic_auth_secret_cmd(deps_factory: DependencyFactory) -> Command[CreateBasicAuthSecretOptions]:
    return Command(
        "basic-auth-secret",
        CreateBasicAuthSecretOptions(),
        run_create_basic_auth_secret,
        deps_factory,
        help="Create basic auth secret for registry or Git access.",
    )


def new_app(deps_factory: DependencyFactory) -> typer.Typer:
    """Build the create command group."""
    app = typer.Typer(help="Create resources (service-account, basic-auth-secret).", no_args_is_help=True)
    new_create_service_account_cmd(deps_factory).register(app)
    new_create_basic_auth_secret_cmd(deps_factory).register(app)
    return app
