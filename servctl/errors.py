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

"""Errors raised by command validation and backends."""

from __future__ import annotations

import typer

# Usage-error base of the click that typer parses with. typer re-exports
# BadParameter from it, whether it depends on click or ships its own copy.
UsageError: type[Exception] = typer.BadParameter.__bases__[0]


class ValidationError(UsageError):
    """One or more flags are missing or malformed.

    All violations found while validating a command are reported together.

    Attributes:
        missing: Long names of required flags that were not supplied.
        invalid: ``(flag, value, reason)`` tuples for rejected values.
    """

    def __init__(
        self,
        missing: list[str] | None = None,
        invalid: list[tuple[str, str, str]] | None = None,
    ) -> None:
        self.missing = list(missing or [])
        self.invalid = list(invalid or [])
        super().__init__(self._render())

    def _render(self) -> str:
        parts: list[str] = []
        if self.missing:
            names = ", ".join(f'"{name}"' for name in self.missing)
            parts.append(f"required flag(s) {names} not set")
        for name, value, reason in self.invalid:
            parts.append(f'invalid value "{value}" for flag "{name}": {reason}')
        return "; ".join(parts)


class BackendError(RuntimeError):
    """A backend call against the cluster failed.

    Attributes:
        stderr: Diagnostic output of the failed call.
    """

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{message}{detail}")


class NotFoundError(BackendError):
    """The requested resource does not exist."""
