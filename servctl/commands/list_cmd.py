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
"""List subcommands (services)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import typer
from rich.console import Console
from rich.table import Table

from servctl.command import Command
from servctl.deps import DependencyFactory
from servctl.flags import OptionalNamespaceFlags, OutputFlags
from servctl.models import ServiceInfo


@dataclass
class ListServicesOptions:
    namespace_flags: OptionalNamespaceFlags = field(default_factory=OptionalNamespaceFlags)
    output_flags: OutputFlags = field(default_factory=OutputFlags)


def render_services_json(services: list[ServiceInfo]) -> str:
    return json.dumps({"services": [svc.to_dict() for svc in services]}, indent=2, sort_keys=True)


def render_services_table(services: list[ServiceInfo]) -> Table:
    table = Table(title="Services")
    for column in ("Namespace", "Name", "Ready", "Latest revision", "URL"):
        table.add_column(column)
    for svc in services:
        table.add_row(
            svc.namespace,
            svc.name,
            "[green]true[/green]" if svc.ready else "[yellow]false[/yellow]",
            svc.latest_revision,
            svc.url,
        )
    return table


def run_list_services(opts: ListServicesOptions, deps: DependencyFactory) -> None:
    """Print services to stdout as a table or as JSON."""
    services = deps.serving_client().list_services(opts.namespace_flags.name or None)
    if opts.output_flags.json:
        typer.echo(render_services_json(services))
        return
    Console().print(render_services_table(services))


def new_list_services_cmd(deps_factory: DependencyFactory) -> Command[ListServicesOptions]:
    return Command("services", ListServicesOptions(), run_list_services, deps_factory, help="List services.")


def new_app(deps_factory: DependencyFactory) -> typer.Typer:
    """Build the ``list`` command group."""
    app = typer.Typer(help="List resources (services).", no_args_is_help=True)
    new_list_services_cmd(deps_factory).register(app)
    return app
