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
"""Curl subcommand: fetch the content a service is serving."""

from __future__ import annotations

from dataclasses import dataclass, field

import typer

from servctl.command import Command
from servctl.deps import DependencyFactory
from servctl.flags import ServiceFlags


@dataclass
class CurlOptions:
    service_flags: ServiceFlags = field(default_factory=ServiceFlags)


def run_curl(opts: CurlOptions, deps: DependencyFactory) -> None:
    content = deps.serving_client().get_content(opts.service_flags.namespace.name, opts.service_flags.name)
    typer.echo(content)


def new_curl_cmd(deps_factory: DependencyFactory) -> Command[CurlOptions]:
    return Command("curl", CurlOptions(), run_curl, deps_factory, help="Curl service.")
