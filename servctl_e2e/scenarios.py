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
"""Deploy-with-build scenarios against a live cluster."""

from __future__ import annotations

from servctl_e2e.config import E2EEnv
from servctl_e2e.constants import (
    DOCKER_HUB_SERVER,
    ENV_CONTENT_V1,
    ENV_CONTENT_V2,
    EXPECTED_CONTENT_V1,
    EXPECTED_CONTENT_V2,
)
from servctl_e2e.driver import ProcessDriver, RunOpts
from servctl_e2e.poller import CliCurlFetcher, ConvergencePoller
from servctl_e2e.scenario import Scenario

ALLOW_ERROR = RunOpts(allow_error=True)
REDACT = RunOpts(redact=True)

_REQUIRED_ENV = (
    "namespace",
    "build_git_url",
    "build_git_revision_v1",
    "build_git_revision_v2",
    "build_docker_username",
    "build_docker_password",
)


def deploy_with_build(env: E2EEnv, private_image: bool = False) -> Scenario:
    """Build the create -> deploy v1 -> deploy v2 -> delete scenario.

    Args:
        env: E2E environment; registry credentials and Git settings are required.
        private_image: Push to a private repository, which additionally needs
            an image pull secret on the service account.

    Returns:
        A ready-to-run Scenario.

    Raises:
        RuntimeError: If required environment variables are missing.
    """
    image_field = "build_private_image" if private_image else "build_public_image"
    env.require(*_REQUIRED_ENV, image_field)
    image = getattr(env, image_field)

    servctl = ProcessDriver(env.cli_binary, namespace=env.namespace)
    kubectl = ProcessDriver(env.kubectl_binary, namespace=env.namespace)
    poller = ConvergencePoller(timeout=env.poll_timeout_seconds, interval=env.poll_interval_seconds)

    service = "test-d-w-b-priv-i-service-name" if private_image else "test-d-w-b-pub-i-service-name"
    push_secret = f"{service}-docker-secret"
    pull_secret = f"{service}-p-docker-secret"
    service_account = f"{service}-service-account"

    def clean_up() -> None:
        servctl.run_with_opts(["delete", "service", "-s", service], ALLOW_ERROR)
        kubectl.run_with_opts(["delete", "secret", push_secret], ALLOW_ERROR)
        if private_image:
            kubectl.run_with_opts(["delete", "secret", pull_secret], ALLOW_ERROR)
        kubectl.run_with_opts(["delete", "serviceaccount", service_account], ALLOW_ERROR)

    def add_service_account() -> None:
        servctl.run_with_opts([
            "create", "basic-auth-secret",
            "-s", push_secret,
            "--docker-hub",
            "-u", env.build_docker_username,
            "-p", env.build_docker_password,
        ], REDACT)

        create_args = ["create", "service-account", "-a", service_account, "-s", push_secret]
        if private_image:
            kubectl.run_with_opts([
                "create", "secret", "docker-registry", pull_secret,
                "--docker-server", DOCKER_HUB_SERVER,
                "--docker-username", env.build_docker_username,
                "--docker-password", env.build_docker_password,
                "--docker-email", "foo",
            ], REDACT)
            create_args += ["-p", pull_secret]
        servctl.run(create_args)

    def deploy(revision: str, env_var: str, content: str):
        def _deploy() -> None:
            servctl.run([
                "deploy",
                "-s", service,
                "--git-url", env.build_git_url,
                "--git-revision", revision,
                "-i", image,
                "--service-account", service_account,
                "-e", f"{env_var}={content}",
            ])
        return _deploy

    def expect_content(content: str):
        def _expect() -> None:
            poller.wait_for_content(CliCurlFetcher(servctl, service), content)
        return _expect

    def delete_service() -> None:
        servctl.run(["delete", "service", "-s", service])
        out = servctl.run(["list", "services", "--json"])
        if service in out:
            raise AssertionError(f"Expected to not see service '{service}' in the list of services, but was: {out}")

    kind = "private" if private_image else "public"
    return (
        Scenario(f"deploy with build ({kind} image)")
        .cleanup("Delete service, secrets and service account if they exist", clean_up)
        .step("Add service account with Docker push secret", add_service_account)
        .step("Deploy service v1", deploy(env.build_git_revision_v1, ENV_CONTENT_V1, EXPECTED_CONTENT_V1))
        .step("Check service is reachable and presents v1 content", expect_content(EXPECTED_CONTENT_V1))
        .step("Deploy service v2 with a Git change (new env variable)",
              deploy(env.build_git_revision_v2, ENV_CONTENT_V2, EXPECTED_CONTENT_V2))
        .step("Check service is reachable and presents v2 content", expect_content(EXPECTED_CONTENT_V2))
        .step("Delete service", delete_service)
    )
