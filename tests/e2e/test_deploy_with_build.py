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

"""Deploy-with-build scenarios against a live cluster.

Configure with SERVCTL_E2E_* environment variables; see README.md.
"""

from __future__ import annotations

import pytest

from servctl_e2e.config import E2EEnv
from servctl_e2e.scenarios import deploy_with_build

pytestmark = pytest.mark.e2e


@pytest.fixture
def env() -> E2EEnv:
    env = E2EEnv()
    missing = env.missing("namespace")
    if missing:
        pytest.skip(f"live cluster not configured ({', '.join(missing)} unset)")
    return env


def test_deploy_with_build_public_image(env):
    deploy_with_build(env).run()


def test_deploy_with_build_private_image(env):
    deploy_with_build(env, private_image=True).run()
