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

"""Live-cluster backend that drives kubectl."""

from __future__ import annotations

import json
from urllib.parse import urlparse

import requests
import sh
import yaml

from servctl import logger
from servctl.config import CliSettings
from servctl.constants import (
    ANNOTATION_BASIC_AUTH_URL_TEMPLATE,
    ANNOTATION_GIT_REVISION,
    ANNOTATION_GIT_URL,
    SECRET_TYPE_BASIC_AUTH,
    SECRET_TYPE_DOCKER_CONFIG_JSON,
    SERVING_API_VERSION,
    SERVING_KIND_SERVICE,
    SERVING_RESOURCE,
)
from servctl.errors import BackendError, NotFoundError
from servctl.models import BasicAuthSecret, ServiceInfo, ServiceSpec


class Kubectl:
    """Thin wrapper that runs kubectl and maps failures to BackendError."""

    def __init__(self, settings: CliSettings) -> None:
        global_args: list[str] = []
        if settings.kubeconfig:
            global_args += ["--kubeconfig", settings.kubeconfig]
        if settings.context:
            global_args += ["--context", settings.context]
        self._settings = settings
        self._global_args = global_args

    def __call__(self, *args: str, stdin: str | None = None) -> str:
        """Run kubectl with the configured global flags.

        Args:
            *args: kubectl arguments.
            stdin: Text piped to kubectl, e.g. a manifest for ``apply -f -``.

        Returns:
            kubectl's stdout.

        Raises:
            NotFoundError: If kubectl reports the resource does not exist.
            BackendError: On any other failure.
        """
        logger.debug("kubectl %s", " ".join(args))
        try:
            kubectl = sh.Command(self._settings.kubectl)
            result = kubectl(
                *self._global_args, *args,
                _in=stdin,
                _timeout=self._settings.request_timeout_seconds,
            )
        except sh.CommandNotFound as err:
            raise BackendError(f"Required command '{self._settings.kubectl}' not found") from err
        except sh.TimeoutException as err:
            raise BackendError(f"kubectl {args[0]} timed out") from err
        except sh.ErrorReturnCode as err:
            stderr = err.stderr.decode(errors="replace")
            if "NotFound" in stderr or "not found" in stderr:
                raise NotFoundError(f"kubectl {args[0]} failed", stderr) from err
            raise BackendError(f"kubectl {args[0]} failed", stderr) from err
        return str(result)

    def apply(self, manifest: dict) -> None:
        self("apply", "-f", "-", stdin=yaml.safe_dump(manifest, default_flow_style=False))


# ============================================================================
# Manifests
# ============================================================================

def basic_auth_secret_manifest(namespace: str, name: str, secret: BasicAuthSecret) -> dict:
    """Build a Secret manifest for registry or Git credentials.

    Pull secrets use the dockerconfigjson layout so they can be referenced
    from ``imagePullSecrets``; the rest use basic-auth with a URL annotation.
    """
    metadata: dict = {"name": name, "namespace": namespace}
    if secret.for_pull:
        auths = {"auths": {secret.url: {"username": secret.username, "password": secret.password}}}
        return {
            "apiVersion": "v1",
            "kind": "Secret",
            "metadata": metadata,
            "type": SECRET_TYPE_DOCKER_CONFIG_JSON,
            "stringData": {".dockerconfigjson": json.dumps(auths)},
        }
    metadata["annotations"] = {ANNOTATION_BASIC_AUTH_URL_TEMPLATE.format(type=secret.type): secret.url}
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": metadata,
        "type": SECRET_TYPE_BASIC_AUTH,
        "stringData": {"username": secret.username, "password": secret.password},
    }


def service_account_manifest(
    namespace: str, name: str, secrets: list[str], image_pull_secrets: list[str]
) -> dict:
    return {
        "apiVersion": "v1",
        "kind": "ServiceAccount",
        "metadata": {"name": name, "namespace": namespace},
        "secrets": [{"name": s} for s in secrets],
        "imagePullSecrets": [{"name": s} for s in image_pull_secrets],
    }


def service_manifest(namespace: str, name: str, spec: ServiceSpec) -> dict:
    """Build a serving Service manifest for one revision."""
    annotations: dict[str, str] = {}
    if spec.git_url:
        annotations[ANNOTATION_GIT_URL] = spec.git_url
    if spec.git_revision:
        annotations[ANNOTATION_GIT_REVISION] = spec.git_revision

    container: dict = {"image": spec.image}
    if spec.env:
        container["env"] = [{"name": key, "value": value} for key, value in spec.env]

    revision_spec: dict = {"containers": [container]}
    if spec.service_account:
        revision_spec["serviceAccountName"] = spec.service_account

    return {
        "apiVersion": SERVING_API_VERSION,
        "kind": SERVING_KIND_SERVICE,
        "metadata": {"name": name, "namespace": namespace, "annotations": annotations},
        "spec": {
            "template": {
                "metadata": {"annotations": annotations},
                "spec": revision_spec,
            },
        },
    }


def _service_info(item: dict) -> ServiceInfo:
    metadata = item.get("metadata", {})
    status = item.get("status", {})
    ready = any(
        cond.get("type") == "Ready" and cond.get("status") == "True"
        for cond in status.get("conditions", [])
    )
    return ServiceInfo(
        name=metadata.get("name", ""),
        namespace=metadata.get("namespace", ""),
        url=status.get("url", ""),
        ready=ready,
        latest_revision=status.get("latestReadyRevisionName", ""),
        annotations=metadata.get("annotations") or {},
    )


# ============================================================================
# Clients
# ============================================================================

class KubectlCoreClient:
    def __init__(self, kubectl: Kubectl) -> None:
        self._kubectl = kubectl

    def create_basic_auth_secret(self, namespace: str, name: str, secret: BasicAuthSecret) -> None:
        self._kubectl.apply(basic_auth_secret_manifest(namespace, name, secret))

    def create_service_account(
        self, namespace: str, name: str, secrets: list[str], image_pull_secrets: list[str]
    ) -> None:
        self._kubectl.apply(service_account_manifest(namespace, name, secrets, image_pull_secrets))

    def delete_secret(self, namespace: str, name: str) -> None:
        self._kubectl("delete", "secret", name, "-n", namespace)

    def delete_service_account(self, namespace: str, name: str) -> None:
        self._kubectl("delete", "serviceaccount", name, "-n", namespace)


class KubectlServingClient:
    def __init__(self, kubectl: Kubectl, settings: CliSettings) -> None:
        self._kubectl = kubectl
        self._settings = settings

    def deploy(self, namespace: str, name: str, spec: ServiceSpec) -> None:
        self._kubectl.apply(service_manifest(namespace, name, spec))

    def delete_service(self, namespace: str, name: str) -> None:
        self._kubectl("delete", SERVING_RESOURCE, name, "-n", namespace)

    def list_services(self, namespace: str | None) -> list[ServiceInfo]:
        scope = ["-n", namespace] if namespace else ["--all-namespaces"]
        output = self._kubectl("get", SERVING_RESOURCE, *scope, "-o", "json")
        return [_service_info(item) for item in json.loads(output).get("items", [])]

    def get_content(self, namespace: str, name: str) -> str:
        """Fetch the body served at a service's URL.

        Raises:
            BackendError: If the service has no URL yet or the request fails.
        """
        url = self._kubectl(
            "get", SERVING_RESOURCE, name, "-n", namespace, "-o", "jsonpath={.status.url}"
        ).strip()
        if not url:
            raise BackendError(f"Service '{name}' does not have a URL yet")

        headers: dict[str, str] = {}
        target = url
        if self._settings.ingress_address:
            parsed = urlparse(url)
            headers["Host"] = parsed.netloc
            target = f"http://{self._settings.ingress_address}{parsed.path or '/'}"

        try:
            response = requests.get(target, headers=headers, timeout=self._settings.curl_timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as err:
            raise BackendError(f"Request to '{url}' failed: {err}") from err
        return response.text


class KubectlDepsFactory:
    """Dependency factory backed by a live cluster."""

    def __init__(self, settings: CliSettings | None = None) -> None:
        self._settings = settings or CliSettings()
        self._kubectl = Kubectl(self._settings)

    def core_client(self) -> KubectlCoreClient:
        return KubectlCoreClient(self._kubectl)

    def serving_client(self) -> KubectlServingClient:
        return KubectlServingClient(self._kubectl, self._settings)
