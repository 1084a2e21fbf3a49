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
"""Flag-binding tests for every subcommand."""

from __future__ import annotations

import pytest

from servctl.commands.create_cmd import (
    new_create_basic_auth_secret_cmd,
    new_create_service_account_cmd,
    resolve_basic_auth_secret,
)
from servctl.commands.curl_cmd import new_curl_cmd
from servctl.commands.delete_cmd import (
    new_delete_secret_cmd,
    new_delete_service_account_cmd,
    new_delete_service_cmd,
)
from servctl.commands.deploy_cmd import new_deploy_cmd, service_spec
from servctl.commands.list_cmd import new_list_services_cmd
from servctl.constants import DOCKER_HUB_URL, GCR_URL
from servctl.deps import InMemoryDepsFactory
from servctl.errors import ValidationError
from servctl.flags import BasicAuthSecretCreateFlags, NamespaceFlags, ServiceFlags
from servctl.models import BasicAuthSecret, ServiceSpec
from servctl.testing import CommandHarness, expect_options

ALL_COMMANDS = [
    new_create_service_account_cmd,
    new_create_basic_auth_secret_cmd,
    new_delete_service_cmd,
    new_delete_secret_cmd,
    new_delete_service_account_cmd,
    new_deploy_cmd,
    new_list_services_cmd,
    new_curl_cmd,
]


def _harness(factory) -> CommandHarness:
    return CommandHarness(factory(InMemoryDepsFactory()))


@pytest.mark.parametrize("factory", ALL_COMMANDS)
def test_basic_config(factory):
    _harness(factory).expect_basic_config()


@pytest.mark.parametrize(
    "factory, required",
    [
        (new_create_basic_auth_secret_cmd, ["namespace", "secret"]),
        (new_delete_service_cmd, ["namespace", "service"]),
        (new_delete_secret_cmd, ["namespace", "secret"]),
        (new_delete_service_account_cmd, ["namespace", "service-account"]),
        (new_deploy_cmd, ["namespace", "service"]),
        (new_curl_cmd, ["namespace", "service"]),
    ],
)
def test_required_flags(factory, required):
    harness = _harness(factory)
    harness.execute([])
    harness.expect_required_flags(required)


class TestDeployCmd:
    def test_all_flags(self):
        harness = _harness(new_deploy_cmd)
        harness.execute([
            "-n", "ns",
            "-s", "hello",
            "--git-url", "https://github.com/example/app",
            "--git-revision", "v1",
            "-i", "docker.io/example/hello",
            "--service-account", "builder",
            "-e", "SIMPLE_MSG=hi",
            "-e", "OTHER=a=b",
        ])

        harness.expect_reaches_execution()
        opts = harness.command.options
        expect_options(opts.service_flags, ServiceFlags(NamespaceFlags("ns"), "hello"))
        assert service_spec(opts) == ServiceSpec(
            image="docker.io/example/hello",
            env=(("SIMPLE_MSG", "hi"), ("OTHER", "a=b")),
            git_url="https://github.com/example/app",
            git_revision="v1",
            service_account="builder",
        )

    def test_malformed_env_is_rejected(self):
        harness = _harness(new_deploy_cmd)
        harness.execute(["-n", "ns", "-s", "hello", "-e", "GOOD=1", "-e", "no-equals-sign"])

        harness.expect_does_not_reach_execution()
        assert isinstance(harness.error, ValidationError)
        assert harness.error.missing == []
        assert [(name, value) for name, value, _ in harness.error.invalid] == [("env", "no-equals-sign")]

    def test_missing_and_invalid_reported_together(self):
        harness = _harness(new_deploy_cmd)
        harness.execute(["-e", "=oops"])

        assert isinstance(harness.error, ValidationError)
        assert set(harness.error.missing) == {"namespace", "service"}
        assert len(harness.error.invalid) == 1
        assert '"namespace"' in str(harness.error)
        assert '"=oops"' in str(harness.error)


class TestListServicesCmd:
    def test_namespace_is_optional(self):
        harness = _harness(new_list_services_cmd)
        harness.execute([])

        harness.expect_reaches_execution()
        assert harness.command.options.namespace_flags.name == ""
        assert harness.command.options.output_flags.json is False

    def test_json_switch(self):
        harness = _harness(new_list_services_cmd)
        harness.execute(["--json", "-n", "ns"])

        harness.expect_reaches_execution()
        assert harness.command.options.output_flags.json is True
        assert harness.command.options.namespace_flags.name == "ns"


class TestCreateBasicAuthSecretCmd:
    def test_flags(self):
        harness = _harness(new_create_basic_auth_secret_cmd)
        harness.execute(["-n", "ns", "-s", "push", "--docker-hub", "-u", "user", "-p", "pass"])

        harness.expect_reaches_execution()
        assert harness.command.options.create_flags == BasicAuthSecretCreateFlags(
            docker_hub=True, username="user", password="pass"
        )

    def test_conflicting_presets_stop_before_execution(self):
        harness = _harness(new_create_basic_auth_secret_cmd)
        harness.execute(["-n", "ns", "-s", "sec", "--docker-hub", "--gcr"])

        harness.expect_does_not_reach_execution()
        assert isinstance(harness.error, ValidationError)
        assert [name for name, _, _ in harness.error.invalid] == ["gcr"]

    def test_missing_type_and_url_stop_before_execution(self):
        harness = _harness(new_create_basic_auth_secret_cmd)
        harness.execute(["-n", "ns", "-s", "sec", "-u", "user"])

        harness.expect_does_not_reach_execution()
        assert isinstance(harness.error, ValidationError)
        assert harness.error.missing == ["type", "url"]

    def test_explicit_type_and_url_reach_execution(self):
        harness = _harness(new_create_basic_auth_secret_cmd)
        harness.execute(["-n", "ns", "-s", "sec", "--type", "git", "--url", "https://github.com"])

        harness.expect_reaches_execution()

    def test_docker_hub_preset(self):
        secret = resolve_basic_auth_secret(BasicAuthSecretCreateFlags(docker_hub=True, username="u", password="p"))
        assert secret == BasicAuthSecret(url=DOCKER_HUB_URL, type="docker", username="u", password="p")

    def test_gcr_preset(self):
        secret = resolve_basic_auth_secret(BasicAuthSecretCreateFlags(gcr=True, for_pull=True))
        assert secret.url == GCR_URL
        assert secret.for_pull is True

    def test_explicit_type_and_url(self):
        secret = resolve_basic_auth_secret(BasicAuthSecretCreateFlags(type="git", url="https://github.com"))
        assert (secret.type, secret.url) == ("git", "https://github.com")

    def test_presets_conflict(self):
        with pytest.raises(ValidationError, match="docker-hub"):
            resolve_basic_auth_secret(BasicAuthSecretCreateFlags(docker_hub=True, gcr=True))

    def test_preset_conflicts_with_url(self):
        with pytest.raises(ValidationError):
            resolve_basic_auth_secret(BasicAuthSecretCreateFlags(gcr=True, url="https://other"))

    def test_type_and_url_required_without_preset(self):
        with pytest.raises(ValidationError) as excinfo:
            resolve_basic_auth_secret(BasicAuthSecretCreateFlags(username="u"))
        assert excinfo.value.missing == ["type", "url"]
