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

"""Delete subcommands (service, secret, service-account)."""

from __future__ import annotations

from dataclasses import dataclass, field

import typer

from servctl import console
from servctl.command import Command
from servctl.deps import DependencyFactory
from servctl.flags import SecretFlags, ServiceAccountFlags, ServiceFlags


@dataclass
class DeleteServiceOptions:
    service_flags: ServiceFlags = field(default_factory=ServiceFlags)


@dataclass
class DeleteSecretOptions:
    secret_flags: SecretFlags = field(default_factory=SecretFlags)


@dataclass
class DeleteServiceAccountOptions:
    service_account_flags: ServiceAccountFlags = field(default_factory=ServiceAccountFlags)


def run_delete_service(opts: DeleteServiceOptions, deps: DependencyFactory) -> None:
    namespace, name = opts.service_flags.namespace.name, opts.service_flags.name
    deps.serving_client().delete_service(namespace, name)
    console.print(f"[green]\u2705 Service '{name}' deleted[/green]")


def run_delete_secret(opts: DeleteSecretOptions, deps: DependencyFactory) -> None:
    namespace, name = opts.secret_flags.namespace.name, opts.secret_flags.name
    deps.core_client().delete_secret(namespace, name)
    console.print(f"[green]\u2705 Secret '{name}' deleted[/green]")


def run_delete_service_account(opts: DeleteServiceAccountOptions, deps: DependencyFactory) -> None:
    namespace, name = opts.service_account_flags.namespace.name, opts.service_account_flags.name
    deps.core_client().delete_service_account(namespace, name)
    console.print(f"[green]\u2705 Service account '{name}' deleted[/green]")


def new_delete_service_cmd(deps_factory: DependencyFactory) -> Command[DeleteServiceOptions]:
    return Command("service", DeleteServiceOptions(), run_delete_service, deps_factory, help="Delete service.")


def new_delete_secret_cmd(deps_factory: DependencyFactory) -> Command[DeleteSecretOptions]:
    return Command("secret", DeleteSecretOptions(), run_delete_secret, deps_factory, help="Delete secret.")


def new_delete_service_account_cmd(deps_factory: DependencyFactory) -> Command[DeleteServiceAccountOptions]:
    return Command(
        "service-account",
        DeleteServiceAccountOptions(),
        run_delete_service_account,
        deps_factory,
        help="Delete service account.",
    )


def new_app(deps_factory: DependencyFactory) -> typer.Typer:
    """Build the ``delete`` command group."""
    app = typer.Typer(help="Delete resources (service, secret, service-account).", no_args_is_help=True)
    new_delete_service_cmd(deps_factory).register(app)
    new_delete_secret_cmd(deps_factory).register(app)
    new_delete_service_account_cmd(deps_factory).register(app)
    return app
