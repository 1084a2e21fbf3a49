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
"""Errors that abort a scenario."""

from __future__ import annotations


class SubprocessError(RuntimeError):
    """An external command exited non-zero.

    Attributes:
        argv: Argument vector as logged (sensitive values redacted).
        exit_code: Process exit status.
        stdout: Captured standard output (redacted).
        stderr: Captured standard error (redacted).
    """

    def __init__(self, argv: list[str], exit_code: int, stdout: str, stderr: str) -> None:
        self.argv = argv
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"Command '{' '.join(argv)}' exited with {exit_code}\n"
            f"stdout: {stdout.strip()}\nstderr: {stderr.strip()}"
        )


class ConvergenceTimeout(RuntimeError):
    """Expected content was not observed before the deadline.

    Attributes:
        expected: The content that was waited for.
        timeout: Deadline in seconds.
        last_output: The last content fetched, or the last fetch error.
    """

    def __init__(self, expected: str, timeout: float, last_output: str) -> None:
        self.expected = expected
        self.timeout = timeout
        self.last_output = last_output
        super().__init__(
            f"Timed out after {timeout:g}s waiting for content '{expected}'; "
            f"last output: {last_output.strip()[:500]}"
        )
