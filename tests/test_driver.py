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

"""Tests for the subprocess driver."""

from __future__ import annotations

import logging
import sys
import traceback

import pytest
import sh

from servctl_e2e.driver import ProcessDriver, RunOpts, redact_argv, scrub, sensitive_values
from servctl_e2e.errors import SubprocessError

PRINT_LAST_ARG = "import sys; print(sys.argv[-1])"
PRINT_ARGS = "import sys; print(sys.argv[1:])"
FAIL_WITH_SECRET = "import sys; print('out ' + sys.argv[-1]); sys.stderr.write('boom ' + sys.argv[-1]); sys.exit(3)"


@pytest.fixture
def driver() -> ProcessDriver:
    return ProcessDriver(sys.executable)


class TestRedaction:
    def test_redact_argv(self):
        argv = ["create", "-u", "user", "-p", "pass", "--password=pw", "-s", "name"]
        assert redact_argv(argv) == [
            "create", "-u", "<redacted>", "-p", "<redacted>", "--password=<redacted>", "-s", "name",
        ]

    def test_redact_trailing_flag(self):
        assert redact_argv(["-p"]) == ["-p"]

    def test_sensitive_values(self):
        assert sensitive_values(["-u", "user", "--docker-password=pw", "-s", "x"]) == ["user", "pw"]

    def test_scrub_longest_first(self):
        assert scrub("pass password", ["pass", "password"]) == "<redacted> <redacted>"


class TestProcessDriver:
    def test_run_returns_stdout(self, driver):
        assert driver.run(["-c", "print('hello')"]).strip() == "hello"

    def test_appends_namespace(self):
        driver = ProcessDriver(sys.executable, namespace="e2e")
        assert driver.run(["-c", PRINT_ARGS]).strip() == "['-n', 'e2e']"

    def test_no_namespace(self):
        driver = ProcessDriver(sys.executable, namespace="e2e")
        result = driver.run_with_opts(["-c", PRINT_ARGS], RunOpts(no_namespace=True))
        assert result.stdout.strip() == "[]"

    def test_stdin(self, driver):
        result = driver.run_with_opts(["-c", "import sys; print(sys.stdin.read().upper())"], RunOpts(stdin="piped"))
        assert result.stdout.strip() == "PIPED"

    def test_non_zero_exit_raises(self, driver):
        with pytest.raises(SubprocessError) as excinfo:
            driver.run(["-c", FAIL_WITH_SECRET, "-p", "value"])
        assert excinfo.value.exit_code == 3
        assert "boom value" in excinfo.value.stderr

    def test_allow_error(self, driver):
        result = driver.run_with_opts(["-c", FAIL_WITH_SECRET, "-p", "value"], RunOpts(allow_error=True))
        assert result.exit_code == 3
        assert result.stdout.strip() == "out value"
        assert result.stderr == "boom value"

    def test_missing_binary(self):
        with pytest.raises(SubprocessError) as excinfo:
            ProcessDriver("servctl-e2e-no-such-binary").run(["list", "services"])
        assert excinfo.value.exit_code == 127

    def test_redacted_run_keeps_secret_out_of_logs(self, driver, caplog):
        caplog.set_level(logging.DEBUG, logger="servctl_e2e")

        result = driver.run_with_opts(["-c", PRINT_LAST_ARG, "-p", "s3cret"], RunOpts(redact=True))

        assert result.stdout.strip() == "s3cret"
        assert "s3cret" not in caplog.text
        assert "-p <redacted>" in caplog.text

    def test_unredacted_run_logs_arguments(self, driver, caplog):
        caplog.set_level(logging.DEBUG, logger="servctl_e2e")

        driver.run_with_opts(["-c", PRINT_LAST_ARG, "-p", "visible"], RunOpts())

        assert "-p visible" in caplog.text

    def test_redacted_failure_keeps_secret_out_of_error(self, driver, caplog):
        caplog.set_level(logging.DEBUG, logger="servctl_e2e")

        with pytest.raises(SubprocessError) as excinfo:
            driver.run_with_opts(["-c", FAIL_WITH_SECRET, "-p", "s3cret"], RunOpts(redact=True))

        assert "s3cret" not in str(excinfo.value)
        assert "boom <redacted>" in excinfo.value.stderr
        assert "s3cret" not in caplog.text

    def test_redacted_failure_traceback_has_no_secret(self, driver):
        with pytest.raises(SubprocessError) as excinfo:
            driver.run_with_opts(["-c", "import sys; sys.exit(3)", "-p", "s3cret"], RunOpts(redact=True))

        formatted = "".join(traceback.format_exception(excinfo.value))
        assert "s3cret" not in formatted
        assert excinfo.value.__cause__ is None

    def test_unredacted_failure_keeps_cause(self, driver):
        with pytest.raises(SubprocessError) as excinfo:
            driver.run(["-c", "import sys; sys.exit(3)"])

        assert isinstance(excinfo.value.__cause__, sh.ErrorReturnCode)

    def test_redacted_run_keeps_secret_out_of_library_logs(self, driver, caplog):
        caplog.set_level(logging.DEBUG)

        result = driver.run_with_opts(["-c", PRINT_LAST_ARG, "-p", "s3cret"], RunOpts(redact=True))

        assert result.stdout.strip() == "s3cret"
        assert "s3cret" not in caplog.text
        assert any(record.name.startswith("sh.") and "<redacted>" in record.getMessage() for record in caplog.records)

    def test_library_log_level_restored(self, driver):
        sh_logger = logging.getLogger("sh")
        previous = sh_logger.level

        driver.run_with_opts(["-c", "pass", "-p", "s3cret"], RunOpts(redact=True))

        assert sh_logger.level == previous
