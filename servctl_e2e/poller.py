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
"""Convergence poller: wait until a service serves the expected content."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import requests
from tenacity import RetryError, Retrying, before_sleep_log, retry_if_result, stop_after_delay, wait_fixed

from servctl_e2e import console, logger
from servctl_e2e.constants import (
    COMMAND_NOT_FOUND_EXIT_CODE,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
)
from servctl_e2e.driver import ProcessDriver, RunOpts
from servctl_e2e.errors import ConvergenceTimeout, SubprocessError

Fetch = Callable[[], str]

# Fetch failures that only mean "not routable yet".
TRANSIENT_ERRORS = (SubprocessError, requests.RequestException)


class CliCurlFetcher:
    """Fetch a service's content with ``servctl curl -s <service>``.

    A failed curl is not fatal while the service converges; its stderr is
    returned so the poller reports it as the last output.
    """

    def __init__(self, driver: ProcessDriver, service: str) -> None:
        self.driver = driver
        self.service = service

    def __call__(self) -> str:
        result = self.driver.run_with_opts(["curl", "-s", self.service], RunOpts(allow_error=True))
        return result.stdout if result.exit_code == 0 else result.stderr


class HttpFetcher:
    """Fetch content with an HTTP GET, optionally overriding the Host header."""

    def __init__(self, url: str, host: str | None = None, timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS) -> None:
        self.url = url
        self.host = host
        self.timeout = timeout

    def __call__(self) -> str:
        headers = {"Host": self.host} if self.host else {}
        response = requests.get(self.url, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.text


class ConvergencePoller:
    """Polls a fetch callable until its output contains expected content.

    Attributes:
        timeout: Deadline in seconds; polling stops at the first attempt
            that finishes at or after it.
        interval: Wait between attempts in seconds.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_POLL_TIMEOUT_SECONDS,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if timeout <= 0 or interval <= 0:
            raise ValueError("timeout and interval must be positive")
        self.timeout = timeout
        self.interval = interval
        self._sleep = sleep

    def wait_for_content(self, fetch: Fetch, expected: str) -> str:
        """Return the first fetched content that contains ``expected``.

        Args:
            fetch: Callable returning the current content. Raising one of
                TRANSIENT_ERRORS counts as "not there yet", except a
                SubprocessError for a missing program, which propagates.
            expected: Substring to wait for.

        Returns:
            The fetched content.

        Raises:
            ConvergenceTimeout: If the deadline passes first.
        """
        last_output = ""
        attempts = 0

        def _attempt() -> str | None:
            nonlocal last_output, attempts
            attempts += 1
            try:
                output = fetch()
            except TRANSIENT_ERRORS as err:
                if isinstance(err, SubprocessError) and err.exit_code == COMMAND_NOT_FOUND_EXIT_CODE:
                    raise
                last_output = str(err)
                return None
            last_output = output
            return output if expected in output else None

        retrying = Retrying(
            stop=stop_after_delay(self.timeout),
            wait=wait_fixed(self.interval),
            retry=retry_if_result(lambda output: output is None),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            sleep=self._sleep,
        )
        console.print(f"[yellow]\u2139\ufe0f  Waiting for content '{expected}' (timeout {self.timeout:g}s)...[/yellow]")
        try:
            content = retrying(_attempt)
        except RetryError as err:
            raise ConvergenceTimeout(expected, self.timeout, last_output) from err
        console.print(f"[green]\u2705 Content '{expected}' observed after {attempts} attempt(s)[/green]")
        return content
