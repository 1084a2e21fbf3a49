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
"""Test harness for commands: parse flags without touching backends.

Example::

    cmd = new_create_service_account_cmd(InMemoryDepsFactory())
    harness = CommandHarness(cmd)
    harness.execute(["-n", "ns", "-a", "sa"])
    harness.expect_reaches_execution()
"""

from __future__ import annotations

import difflib
import pprint
from collections.abc import Iterable
from typing import Any

import typer

from servctl.command import Command
from servctl.errors import UsageError, ValidationError


class CommandHarness:
    """Drives a Command through parsing with its handler intercepted.

    Attributes:
        command: The wrapped command; its handler is replaced by a recorder.
        reached: Whether the (intercepted) handler was called.
        error: The usage error raised while parsing, if any.
    """

    def __init__(self, command: Command) -> None:
        self.command = command
        self.reached = False
        self.error: UsageError | None = None
        command.handler = self._record

    def _record(self, options: Any, deps: Any) -> None:
        self.reached = True

    def execute(self, argv: list[str]) -> None:
        """Parse ``argv`` and run validation, capturing usage errors.

        Args:
            argv: Literal argument vector, without the command name.
        """
        self.reached = False
        self.error = None
        app = typer.Typer(add_completion=False)
        self.command.register(app)
        click_cmd = typer.main.get_command(app)
        try:
            click_cmd.main(args=list(argv), prog_name=self.command.name, standalone_mode=False)
        except UsageError as err:
            self.error = err

    # ------------------------------------------------------------------
    # Expectations
    # ------------------------------------------------------------------

    def expect_basic_config(self) -> None:
        """Every command needs help text, and so does each of its flags."""
        if not self.command.help:
            raise AssertionError(f"Command '{self.command.name}' has no help text")
        undocumented = [bound.spec.name for bound in self.command.flags if not bound.spec.help]
        if undocumented:
            raise AssertionError(f"Command '{self.command.name}' has flags without help: {undocumented}")

    def expect_reaches_execution(self) -> None:
        if self.error is not None:
            raise AssertionError(f"Expected execution to be reached, but parsing failed: {self.error}")
        if not self.reached:
            raise AssertionError("Expected execution to be reached")

    def expect_does_not_reach_execution(self) -> None:
        if self.reached:
            raise AssertionError("Expected execution not to be reached")

    def expect_required_flags(self, expected: Iterable[str]) -> None:
        """Assert the set of flags reported missing equals ``expected``.

        Raises:
            AssertionError: Listing the symmetric difference on mismatch.
        """
        self.expect_does_not_reach_execution()
        expected_set = set(expected)
        if not isinstance(self.error, ValidationError):
            raise AssertionError(f"Expected missing flags {sorted(expected_set)}, got error: {self.error!r}")
        actual_set = set(self.error.missing)
        if actual_set != expected_set:
            raise AssertionError(
                "Required flags mismatch: "
                f"expected but not reported {sorted(expected_set - actual_set)}, "
                f"reported but not expected {sorted(actual_set - expected_set)}"
            )


def expect_options(actual: Any, expected: Any) -> None:
    """Deep-compare two options values.

    Raises:
        AssertionError: Carrying a unified diff of the pretty-printed values.
    """
    if actual == expected:
        return
    diff = difflib.unified_diff(
        pprint.pformat(expected, width=60).splitlines(),
        pprint.pformat(actual, width=60).splitlines(),
        fromfile="expected",
        tofile="actual",
        lineterm="",
    )
    raise AssertionError("Options mismatch:\n" + "\n".join(diff))
