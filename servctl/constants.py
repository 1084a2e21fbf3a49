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

"""Constants for resource kinds, annotations, and CLI defaults."""

from __future__ import annotations

# -- Flag metadata --
FLAG_METADATA_KEY = "servctl.flag"
ENV_VAR_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*=.*"

# -- Serving API --
SERVING_API_VERSION = "serving.knative.dev/v1"
SERVING_KIND_SERVICE = "Service"
SERVING_RESOURCE = "services.serving.knative.dev"

# -- Annotations --
ANNOTATION_PREFIX = "servctl.dev"
ANNOTATION_GIT_URL = f"{ANNOTATION_PREFIX}/git-url"
ANNOTATION_GIT_REVISION = f"{ANNOTATION_PREFIX}/git-revision"
ANNOTATION_BASIC_AUTH_URL_TEMPLATE = "build.knative.dev/{type}-0"

# -- Registries --
DOCKER_HUB_URL = "https://index.docker.io/v1/"
GCR_URL = "https://gcr.io"
SECRET_TYPE_BASIC_AUTH = "kubernetes.io/basic-auth"
SECRET_TYPE_DOCKER_CONFIG_JSON = "kubernetes.io/dockerconfigjson"

# -- Backend defaults --
DEFAULT_KUBECTL = "kubectl"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
DEFAULT_CURL_TIMEOUT_SECONDS = 10
DEFAULT_SECRET_TYPE = "docker"
