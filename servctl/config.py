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

"""CLI settings loaded from SERVCTL_* environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from servctl.constants import (
    DEFAULT_CURL_TIMEOUT_SECONDS,
    DEFAULT_KUBECTL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)


class CliSettings(BaseSettings):
    """Backend connection settings, auto-loaded from SERVCTL_* env vars.

    Attributes:
        kubectl: kubectl binary used by the live backend.
        kubeconfig: Path to a kubeconfig file, or None for kubectl's default.
        context: kubeconfig context name, or None for the current context.
        ingress_address: Host[:port] of the cluster ingress used by ``curl``,
            or None to request the service URL directly.
        request_timeout_seconds: Timeout for each kubectl call.
        curl_timeout_seconds: Timeout for each ``curl`` HTTP request.
    """

    model_config = SettingsConfigDict(env_prefix="SERVCTL_", extra="ignore")

    kubectl: str = DEFAULT_KUBECTL
    kubeconfig: str | None = None
    context: str | None = None
    ingress_address: str | None = None
    request_timeout_seconds: int = Field(default=DEFAULT_REQUEST_TIMEOUT_SECONDS, ge=1, le=600)
    curl_timeout_seconds: int = Field(default=DEFAULT_CURL_TIMEOUT_SECONDS, ge=1, le=600)
