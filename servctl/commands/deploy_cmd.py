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
"""Deploy subcommand."""

from __future__ import annotations

from dataclasses import dataclass, field

from servctl import console
from servctl.command import Command
from servctl.deps import DependencyFactory
from servctl.flags import BuildSourceFlags, DeployFlags, ServiceFlags
from servctl.models import ServiceSpec, parse_env


@dataclass
class DeployOptions:
    service_flags: ServiceFlags = field(default_factory=ServiceFlags)
    build_flags: BuildSourceFlags = field(default_factory=BuildSourceFlags)
    deploy_flags: DeployFlags = field(default_factory=DeployFlags)


def service_spec(opts: DeployOptions) -> ServiceSpec:
    """Translate deploy flags into the desired service state."""
    return ServiceSpec(
        image=opts.deploy_flags.image,
        env=parse_env(opts.deploy_flags.env),
        git_url=opts.build_flags.git_url,
        git_revision=opts.build_flags.git_revision,
        service_account=opts.build_flags.service_account,
    )


def run_deploy(opts: DeployOptions, deps: DependencyFactory) -> None:
    """Create or update a service with a new revision."""
    namespace, name = opts.service_flags.namespace.name, opts.service_flags.name
    spec = service_spec(opts)
    console.print(f"[yellow]\u2139\ufe0f  Deploying service '{name}' (image: {spec.image or '<from build>'})...[/yellow]")
    deps.serving_client().deploy(namespace, name, spec)
    console.print(f"[green]\u2705 Service '{name}' deployed[/green]")


def new_deploy_cmd(deps_factory: DependencyFactory) -> Command[DeployOptions]:
    return Command("deploy", DeployOptions(), run_deploy, deps_factory, help="Deploy service.")
