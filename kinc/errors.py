# /*
# Copyright 2026 The kinc Authors.
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

"""Error taxonomy for runtime calls and cluster lifecycle steps."""

from __future__ import annotations


class KincError(RuntimeError):
    """Base class for every error kinc raises on purpose."""


class RuntimeUnavailableError(KincError):
    """The container runtime executable could not be invoked."""


class RuntimeOperationError(KincError):
    """A runtime command exited non-zero.

    Attributes:
        command: The command line that failed.
        output: Combined stdout/stderr of the failed command.
    """

    def __init__(self, command: str, output: str) -> None:
        self.command = command
        self.output = output.strip()
        message = f"'{command}' failed"
        if self.output:
            message = f"{message}: {self.output}"
        super().__init__(message)


class DiscoveryError(KincError):
    """Listing containers or networks failed at the invocation level."""


class ProvisioningError(KincError):
    """A cluster creation step failed.

    Attributes:
        step: Which creation step failed (``network``, ``control-plane``, ``worker``).
        resource: Name of the resource being created when the step failed.
    """

    def __init__(self, step: str, resource: str, cause: Exception) -> None:
        self.step = step
        self.resource = resource
        kind = "network" if step == "network" else f"{step} node"
        super().__init__(f"failed to create {kind} {resource}: {cause}")


class InvalidClusterRequestError(KincError):
    """The cluster request was rejected before touching the runtime."""
