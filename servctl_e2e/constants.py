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
"""Defaults for the e2e harness."""

from __future__ import annotations

# -- Binaries --
DEFAULT_CLI_BINARY = "servctl"
DEFAULT_KUBECTL_BINARY = "kubectl"
COMMAND_NOT_FOUND_EXIT_CODE = 127

# -- Convergence polling --
DEFAULT_POLL_TIMEOUT_SECONDS = 300.0
DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0

# -- Redaction --
REDACTED_PLACEHOLDER = "<redacted>"
SH_LOGGER_NAME = "sh"
SENSITIVE_FLAGS = frozenset({
    "-p",
    "--password",
    "-u",
    "--username",
    "--docker-password",
    "--docker-username",
    "--token",
})

# -- Sample app --
EXPECTED_CONTENT_V1 = "TestDeployWithBuild_ContentV1"
EXPECTED_CONTENT_V2 = "TestDeployWithBuild_ContentV2"
ENV_CONTENT_V1 = "SIMPLE_MSG"
ENV_CONTENT_V2 = "SIMPLE_MSG_V2"
DOCKER_HUB_SERVER = "https://index.docker.io"
