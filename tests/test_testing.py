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
"""Tests for the command test harness itself."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
import typer

from servctl.command import Command
from servctl.commands.create_cmd import new_create_service_account_cmd
from servctl.deps import InMemoryDepsFactory
from servctl.errors import UsageError, ValidationError
from servctl.flags import NamespaceFlags, ServiceAccountFlags, flag
from servctl.testing import CommandHarness, expect_options


@dataclass
class _UndocumentedOptions:
    name: str = flag("name")


class TestCommandHarness:
    def test_handler_is_intercepted(self):
        deps = InMemoryDepsFactory()
        harness = CommandHarness(new_create_service_account_cmd(deps))
        harness.execute(["-n", "ns", "-a", "sa"])

        harness.expect_reaches_execution()
        assert deps.core_client().service_accounts == {}

    def test_required_flags_mismatch_lists_difference(self):
        harness = CommandHarness(new_create_service_account_cmd(InMemoryDepsFactory()))
        harness.execute(["-n", "ns"])

        with pytest.raises(AssertionError) as excinfo:
            harness.expect_required_flags(["namespace"])
        message = str(excinfo.value)
        assert "expected but not reported ['namespace']" in message
        assert "reported but not expected ['service-account']" in message

    def test_reaches_execution_fails_on_usage_error(self):
        harness = CommandHarness(new_create_service_account_cmd(InMemoryDepsFactory()))
        harness.execute([])

        with pytest.raises(AssertionError, match="parsing failed"):
            harness.expect_reaches_execution()

    def test_does_not_reach_execution_fails_when_reached(self):
        harness = CommandHarness(new_create_service_account_cmd(InMemoryDepsFactory()))
        harness.execute(["-n", "ns", "-a", "sa"])

        with pytest.raises(AssertionError):
            harness.expect_does_not_reach_execution()

    def test_basic_config_flags_undocumented_flag(self):
        cmd = Command("bare", _UndocumentedOptions(), lambda opts, deps: None, InMemoryDepsFactory(), help="Bare.")

        with pytest.raises(AssertionError, match="without help"):
            CommandHarness(cmd).expect_basic_config()

    def test_basic_config_flags_missing_command_help(self):
        cmd = Command("bare", NamespaceFlags(), lambda opts, deps: None, InMemoryDepsFactory())

        with pytest.raises(AssertionError, match="no help text"):
            CommandHarness(cmd).expect_basic_config()


class TestUsageErrors:
    def test_validation_error_is_the_parser_usage_error(self):
        assert issubclass(typer.BadParameter, UsageError)
        assert issubclass(ValidationError, UsageError)

    def test_parser_errors_are_captured(self):
        harness = CommandHarness(new_create_service_account_cmd(InMemoryDepsFactory()))
        harness.execute(["-n", "ns", "-a"])

        harness.expect_does_not_reach_execution()
        assert isinstance(harness.error, UsageError)
        assert not isinstance(harness.error, ValidationError)

    def test_unknown_option_is_captured(self):
        harness = CommandHarness(new_create_service_account_cmd(InMemoryDepsFactory()))
        harness.execute(["-n", "ns", "-a", "sa", "--bogus"])

        assert isinstance(harness.error, UsageError)


class TestExpectOptions:
    def test_equal_values_pass(self):
        expect_options(ServiceAccountFlags(NamespaceFlags("ns"), "sa"), ServiceAccountFlags(NamespaceFlags("ns"), "sa"))

    def test_mismatch_shows_diff(self):
        with pytest.raises(AssertionError) as excinfo:
            expect_options(ServiceAccountFlags(NamespaceFlags("other"), "sa"), ServiceAccountFlags(NamespaceFlags("ns"), "sa"))
        message = str(excinfo.value)
        assert "--- expected" in message
        assert "+++ actual" in message
        assert "other" in message
