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
"""Scenario orchestration: ordered steps with guaranteed cleanup."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import ExitStack

from rich.panel import Panel

from servctl_e2e import console, logger

Step = Callable[[], None]


def section(name: str, fn: Step) -> None:
    """Log a named block and run it."""
    console.print(Panel.fit(name, style="bold blue"))
    fn()


class Scenario:
    """An ordered list of steps plus cleanups that always run.

    Lifecycle of ``run()``:

    1. Setup: every cleanup runs once up front to erase leftovers of a
       previous failed run. Cleanups must therefore tolerate "not found".
    2. Running: steps run in declaration order.
    3. Teardown: cleanups run exactly once, in reverse registration order,
       whether or not a step failed. A step failure is re-raised afterwards.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._steps: list[tuple[str, Step]] = []
        self._cleanups: list[tuple[str, Step]] = []

    @property
    def step_names(self) -> list[str]:
        return [name for name, _ in self._steps]

    @property
    def cleanup_names(self) -> list[str]:
        return [name for name, _ in self._cleanups]

    def cleanup(self, name: str, fn: Step) -> Scenario:
        self._cleanups.append((name, fn))
        return self

    def step(self, name: str, fn: Step) -> Scenario:
        self._steps.append((name, fn))
        return self

    def run(self) -> None:
        console.print(Panel.fit(f"Scenario: {self.name}", style="bold magenta"))
        for name, fn in self._cleanups:
            section(f"Pre-cleanup: {name}", fn)

        with ExitStack() as stack:
            for name, fn in self._cleanups:
                stack.callback(section, f"Cleanup: {name}", fn)
            for name, fn in self._steps:
                try:
                    section(name, fn)
                except Exception:
                    logger.error("Scenario '%s' failed at step '%s'", self.name, name)
                    raise

        logger.info("Scenario '%s' passed", self.name)
        console.print(f"[green]\u2705 Scenario '{self.name}' passed[/green]")
