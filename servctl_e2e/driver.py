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
"""External process driver for the servctl binary and kubectl."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

import sh

from servctl_e2e import logger
from servctl_e2e.constants import (
    COMMAND_NOT_FOUND_EXIT_CODE,
    REDACTED_PLACEHOLDER,
    SENSITIVE_FLAGS,
    SH_LOGGER_NAME,
)
from servctl_e2e.errors import SubprocessError


@dataclass(frozen=True)
class RunOpts:
    """Per-invocation options.

    Attributes:
        allow_error: Return a non-zero exit instead of raising.
        redact: Hide sensitive flag values from logs and error messages.
        stdin: Text piped to the process, or None.
        no_namespace: Do not append the driver's ``-n <namespace>``.
    """

    allow_error: bool = False
    redact: bool = False
    stdin: str | None = None
    no_namespace: bool = False


@dataclass(frozen=True)
class ProcessResult:
    stdout: str
    stderr: str
    exit_code: int


def sensitive_values(argv: Sequence[str]) -> list[str]:
    """Collect values passed to sensitive flags (``-p X`` and ``--password=X``)."""
    values: list[str] = []
    for idx, arg in enumerate(argv):
        if arg in SENSITIVE_FLAGS and idx + 1 < len(argv):
            values.append(argv[idx + 1])
            continue
        name, sep, value = arg.partition("=")
        if sep and name in SENSITIVE_FLAGS:
            values.append(value)
    return [value for value in values if value]


def redact_argv(argv: Sequence[str]) -> list[str]:
    """Replace sensitive flag values with a placeholder, keeping flag names."""
    redacted: list[str] = []
    hide_next = False
    for arg in argv:
        if hide_next:
            redacted.append(REDACTED_PLACEHOLDER)
            hide_next = False
            continue
        name, sep, _ = arg.partition("=")
        if sep and name in SENSITIVE_FLAGS:
            redacted.append(f"{name}={REDACTED_PLACEHOLDER}")
            continue
        redacted.append(arg)
        hide_next = arg in SENSITIVE_FLAGS
    return redacted


def scrub(text: str, secrets: Sequence[str]) -> str:
    """Remove every occurrence of ``secrets`` from ``text``."""
    for secret in sorted(secrets, key=len, reverse=True):
        text = text.replace(secret, REDACTED_PLACEHOLDER)
    return text


@contextmanager
def _quiet_sh_debug(active: bool) -> Iterator[None]:
    """Hold sh's loggers above DEBUG, where they dump raw argv and I/O chunks."""
    sh_logger = logging.getLogger(SH_LOGGER_NAME)
    previous = sh_logger.level
    if active:
        sh_logger.setLevel(max(previous, logging.INFO))
    try:
        yield
    finally:
        sh_logger.setLevel(previous)


class ProcessDriver:
    """Runs one external program and captures its output.

    Attributes:
        binary: Program name or path.
        namespace: Appended as ``-n <namespace>`` unless disabled per run.
    """

    def __init__(self, binary: str, namespace: str | None = None) -> None:
        self.binary = binary
        self.namespace = namespace

    def run(self, args: Sequence[str]) -> str:
        """Run and return stdout; any non-zero exit raises SubprocessError."""
        return self.run_with_opts(args, RunOpts()).stdout

    def run_with_opts(self, args: Sequence[str], opts: RunOpts) -> ProcessResult:
        """Run the program with per-invocation options.

        Args:
            args: Arguments after the program name.
            opts: Error tolerance, redaction, and stdin settings.

        Returns:
            Captured stdout, stderr, and exit code. Output is never redacted
            here; redaction only applies to what gets logged.

        Raises:
            SubprocessError: On a non-zero exit unless ``opts.allow_error``,
                or when the program cannot be found.
        """
        argv = list(args)
        if self.namespace and not opts.no_namespace:
            argv += ["-n", self.namespace]

        secrets = sensitive_values(argv) if opts.redact else []
        logged_argv = [self.binary, *(redact_argv(argv) if opts.redact else argv)]
        logger.info("Running '%s'", " ".join(logged_argv))

        try:
            command = sh.Command(self.binary)
        except sh.CommandNotFound as err:
            raise SubprocessError(
                logged_argv, COMMAND_NOT_FOUND_EXIT_CODE, "", f"command not found: {self.binary}"
            ) from err

        def log_msg(ran, call_args, pid=None):
            return f"<Command {' '.join(logged_argv)!r}>"

        try:
            with _quiet_sh_debug(opts.redact):
                proc = command(*argv, _in=opts.stdin, _return_cmd=True, _log_msg=log_msg)
            result = ProcessResult(
                stdout=proc.stdout.decode(errors="replace"),
                stderr=proc.stderr.decode(errors="replace"),
                exit_code=proc.exit_code,
            )
        except sh.ErrorReturnCode as err:
            result = ProcessResult(
                stdout=err.stdout.decode(errors="replace"),
                stderr=err.stderr.decode(errors="replace"),
                exit_code=err.exit_code,
            )
            if not opts.allow_error:
                error = SubprocessError(
                    logged_argv,
                    result.exit_code,
                    scrub(result.stdout, secrets),
                    scrub(result.stderr, secrets),
                )
                # sh's own error repeats the raw command line.
                if opts.redact:
                    raise error from None
                raise error from err
            logger.info("'%s' exited with %d (allowed)", logged_argv[0], result.exit_code)

        logger.debug("stdout: %s", scrub(result.stdout, secrets))
        if result.stderr:
            logger.debug("stderr: %s", scrub(result.stderr, secrets))
        return result
