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

"""Dependency factory interface and the in-memory implementation.

Commands never construct backend clients themselves; they ask the injected
factory. The live implementation lives in :mod:`servctl.backends`.
"""

from __future__ import annotations

from typing import Protocol

from servctl.errors import NotFoundError
from servctl.models import BasicAuthSecret, ServiceInfo, ServiceSpec


class CoreClient(Protocol):
    """Secrets and service accounts."""

    def create_basic_auth_secret(self, namespace: str, name: str, secret: BasicAuthSecret) -> None: ...

    def create_service_account(
        self, namespace: str, name: str, secrets: list[str], image_pull_secrets: list[str]
    ) -> None: ...

    def delete_secret(self, namespace: str, name: str) -> None: ...

    def delete_service_account(self, namespace: str, name: str) -> None: ...


class ServingClient(Protocol):
    """Serving-layer services."""

    def deploy(self, namespace: str, name: str, spec: ServiceSpec) -> None: ...

    def delete_service(self, namespace: str, name: str) -> None: ...

    def list_services(self, namespace: str | None) -> list[ServiceInfo]: ...

    def get_content(self, namespace: str, name: str) -> str: ...


class DependencyFactory(Protocol):
    """Provides backend clients to commands."""

    def core_client(self) -> CoreClient: ...

    def serving_client(self) -> ServingClient: ...


# ============================================================================
# In-memory implementation
# ============================================================================

class _InMemoryCoreClient:
    def __init__(self) -> None:
        self.secrets: dict[tuple[str, str], BasicAuthSecret] = {}
        self.service_accounts: dict[tuple[str, str], dict[str, list[str]]] = {}

    def create_basic_auth_secret(self, namespace: str, name: str, secret: BasicAuthSecret) -> None:
        self.secrets[(namespace, name)] = secret

    def create_service_account(
        self, namespace: str, name: str, secrets: list[str], image_pull_secrets: list[str]
    ) -> None:
        self.service_accounts[(namespace, name)] = {
            "secrets": list(secrets),
            "image_pull_secrets": list(image_pull_secrets),
        }

    def delete_secret(self, namespace: str, name: str) -> None:
        if self.secrets.pop((namespace, name), None) is None:
            raise NotFoundError(f"secret '{name}' not found in namespace '{namespace}'")

    def delete_service_account(self, namespace: str, name: str) -> None:
        if self.service_accounts.pop((namespace, name), None) is None:
            raise NotFoundError(f"service account '{name}' not found in namespace '{namespace}'")


class _InMemoryServingClient:
    def __init__(self) -> None:
        self.services: dict[tuple[str, str], ServiceSpec] = {}
        self.generations: dict[tuple[str, str], int] = {}

    def deploy(self, namespace: str, name: str, spec: ServiceSpec) -> None:
        key = (namespace, name)
        self.services[key] = spec
        self.generations[key] = self.generations.get(key, 0) + 1

    def delete_service(self, namespace: str, name: str) -> None:
        if self.services.pop((namespace, name), None) is None:
            raise NotFoundError(f"service '{name}' not found in namespace '{namespace}'")
        self.generations.pop((namespace, name), None)

    def list_services(self, namespace: str | None) -> list[ServiceInfo]:
        return [
            ServiceInfo(
                name=name,
                namespace=ns,
                url=f"http://{name}.{ns}.example.com",
                ready=True,
                latest_revision=f"{name}-{self.generations[(ns, name)]:05d}",
            )
            for (ns, name) in sorted(self.services)
            if not namespace or ns == namespace
        ]

    def get_content(self, namespace: str, name: str) -> str:
        # Mirrors the sample app, which echoes its environment values.
        spec = self.services.get((namespace, name))
        if spec is None:
            raise NotFoundError(f"service '{name}' not found in namespace '{namespace}'")
        return "\n".join(value for _, value in spec.env)


class InMemoryDepsFactory:
    """Dict-backed factory for tests and dry runs.

    The same client instances are handed out on every call, so state
    survives across commands built from one factory.
    """

    def __init__(self) -> None:
        self._core = _InMemoryCoreClient()
        self._serving = _InMemoryServingClient()

    def core_client(self) -> _InMemoryCoreClient:
        return self._core

    def serving_client(self) -> _InMemoryServingClient:
        return self._serving
