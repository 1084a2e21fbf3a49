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
"""
cli.py - servctl command-line entry point.

Subcommands:
    create     Create resources (service-account, basic-auth-secret)
    delete     Delete resources (service, secret, service-account)
    deploy     Deploy a service revision
    list       List resources (services)
    curl       Fetch the content a service is serving

Examples:
    # Service account with two secrets (order is preserved)
    servctl create service-account -n demo -a builder -s push-secret -s git-secret

    # Deploy a service
    servctl deploy -n demo -s hello -i docker.io/example/hello -e SIMPLE_MSG=hi

    # List services as JSON
    servctl list services -n demo --json

For detailed usage information, run: servctl --help
"""

from __future__ import annotations

import logging
import sys

import typer

from servctl import console
from servctl.backends import KubectlDepsFactory
from servctl.commands import create_cmd, delete_cmd, list_cmd
from servctl.commands.curl_cmd import new_curl_cmd
from servctl.commands.deploy_cmd import new_deploy_cmd
from servctl.deps import DependencyFactory


def _main_callback() -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def build_app(deps_factory: DependencyFactory) -> typer.Typer:
    """Build the full command tree around one dependency factory.

    Args:
        deps_factory: Backend provider shared by every subcommand.

    Returns:
        A fresh typer app; nothing is registered globally.
    """
    app = typer.Typer(
        help="Manage services, secrets, and service accounts.",
        no_args_is_help=True,
        add_completion=False,
    )
    app.callback()(_main_callback)

    app.add_typer(create_cmd.new_app(deps_factory), name="create")
    app.add_typer(delete_cmd.new_app(deps_factory), name="delete")
    app.add_typer(list_cmd.new_app(deps_factory), name="list")
    new_deploy_cmd(deps_factory).register(app)
    new_curl_cmd(deps_factory).register(app)
    return app


def main() -> None:
    try:
        app = build_app(KubectlDepsFactory())
        app()
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
