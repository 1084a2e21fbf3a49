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
"""Shared fixtures."""

from __future__ import annotations

import os

import pytest
from typer.testing import CliRunner

from servctl.cli import build_app
from servctl.deps import InMemoryDepsFactory


@pytest.fixture(autouse=True)
def _isolated_env(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    """Unit tests never see SERVCTL_* variables from the outer environment."""
    if request.node.get_closest_marker("e2e"):
        return
    for key in list(os.environ):
        if key.startswith("SERVCTL_"):
            monkeypatch.delenv(key)


@pytest.fixture
def deps() -> InMemoryDepsFactory:
    return InMemoryDepsFactory()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def app(deps: InMemoryDepsFactory):
    return build_app(deps)
