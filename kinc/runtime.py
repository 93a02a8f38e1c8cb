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

"""Runtime client: network and container primitives over the runtime CLI."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

import sh

from kinc import logger
from kinc.config import KincSettings
from kinc.constants import (
    CONTAINER_LIST_FORMAT,
    DEFAULT_RUNTIME,
    NETWORK_LIST_FORMAT,
    NODE_CGROUP_CONTAINER_PATH,
    NODE_CGROUP_HOST_PATH,
    NODE_CGROUP_MOUNT_MODE,
    NODE_CGROUP_NAMESPACE,
    NODE_COMMAND,
    NODE_ENTRYPOINT,
    NODE_RESTART_POLICY,
    NODE_TMPFS_MOUNTS,
)
from kinc.errors import DiscoveryError, RuntimeOperationError, RuntimeUnavailableError


# ============================================================================
# Container shape
# ============================================================================

@dataclass(frozen=True)
class CgroupMount:
    """Bind mount of the host cgroup filesystem into a node."""

    host_path: str = NODE_CGROUP_HOST_PATH
    container_path: str = NODE_CGROUP_CONTAINER_PATH
    mode: str = NODE_CGROUP_MOUNT_MODE

    def as_volume(self) -> str:
        return f"{self.host_path}:{self.container_path}:{self.mode}"


@dataclass(frozen=True)
class ContainerSpec:
    """Everything needed to start one node container.

    Attributes:
        name: Container name.
        network: Network the container joins.
        image: Node image reference.
        privileged: Whether to run with the privileged security profile.
        cgroupns: Cgroup namespace mode.
        tmpfs: Paths mounted as writable tmpfs.
        cgroup_mount: Host cgroup filesystem bind.
        restart_policy: Runtime restart policy.
        entrypoint: First argument passed after the image.
        command: Remaining arguments; boots the init system.
    """

    name: str
    network: str
    image: str
    privileged: bool = True
    cgroupns: str = NODE_CGROUP_NAMESPACE
    tmpfs: tuple[str, ...] = NODE_TMPFS_MOUNTS
    cgroup_mount: CgroupMount = field(default_factory=CgroupMount)
    restart_policy: str = NODE_RESTART_POLICY
    entrypoint: str = NODE_ENTRYPOINT
    command: tuple[str, ...] = NODE_COMMAND

    def run_args(self) -> list[str]:
        """Build the ``run`` argument vector for this container."""
        args = ["run", "-d", "--name", self.name, "--network", self.network]
        if self.privileged:
            args.append("--privileged")
        args.append(f"--cgroupns={self.cgroupns}")
        for path in self.tmpfs:
            args.extend(["--tmpfs", path])
        args.extend(["--volume", self.cgroup_mount.as_volume()])
        args.extend(["--restart", self.restart_policy])
        args.append(self.image)
        args.append(self.entrypoint)
        args.extend(self.command)
        return args


# ============================================================================
# Runtime interface
# ============================================================================

class ContainerRuntime(Protocol):
    """Operations the lifecycle logic needs from a container runtime."""

    def available(self) -> bool: ...

    def network_exists(self, name: str) -> bool: ...

    def create_network(self, name: str) -> None: ...

    def remove_network(self, name: str) -> None: ...

    def create_container(self, spec: ContainerSpec) -> None: ...

    def stop_container(self, name: str) -> None: ...

    def remove_container(self, name: str, force: bool = True) -> None: ...

    def list_containers(self, prefix: str | None = None) -> list[str]: ...

    def list_networks(self, prefix: str | None = None) -> list[str]: ...


def _decode(data: Any) -> str:
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data or ""


class RuntimeClient:
    """Thin synchronous wrapper around a podman-compatible CLI.

    Every method spawns one process via ``sh``; nothing is cached between
    calls apart from the resolved executable.
    """

    def __init__(self, binary: str = DEFAULT_RUNTIME, command: Callable[..., Any] | None = None) -> None:
        self.binary = binary
        self._command = command

    def _resolve(self) -> Callable[..., Any]:
        if self._command is None:
            try:
                self._command = sh.Command(self.binary)
            except sh.CommandNotFound as err:
                raise RuntimeUnavailableError(
                    f"container runtime '{self.binary}' not found. Please install it first."
                ) from err
        return self._command

    def _run(self, *args: str, combined: bool = True) -> str:
        """Run the runtime with *args* and return its output.

        Args:
            *args: Arguments passed to the runtime executable.
            combined: Merge stderr into stdout. Listings keep them apart so
                warnings never end up inside parsed records.

        Raises:
            RuntimeUnavailableError: If the executable cannot be started.
            RuntimeOperationError: If the command exits non-zero.
        """
        command = self._resolve()
        line = " ".join([self.binary, *args])
        logger.debug("Running: %s", line)
        try:
            return str(command(*args, _err_to_out=combined, _tty_out=False))
        except sh.ErrorReturnCode as err:
            output = _decode(err.stdout) + _decode(err.stderr)
            raise RuntimeOperationError(line, output) from err
        except OSError as err:
            raise RuntimeUnavailableError(f"cannot execute '{self.binary}': {err}") from err

    def available(self) -> bool:
        try:
            self._run("--version")
        except (RuntimeUnavailableError, RuntimeOperationError) as err:
            logger.debug("Runtime check failed: %s", err)
            return False
        return True

    def network_exists(self, name: str) -> bool:
        try:
            self._run("network", "exists", name)
        except RuntimeOperationError:
            return False
        return True

    def create_network(self, name: str) -> None:
        self._run("network", "create", name)

    def remove_network(self, name: str) -> None:
        self._run("network", "rm", name)

    def create_container(self, spec: ContainerSpec) -> None:
        self._run(*spec.run_args())

    def stop_container(self, name: str) -> None:
        self._run("stop", name)

    def remove_container(self, name: str, force: bool = True) -> None:
        args = ["rm"]
        if force:
            args.append("-f")
        args.append(name)
        self._run(*args)

    def list_containers(self, prefix: str | None = None) -> list[str]:
        """List containers as raw tab-separated ``name, status, created`` records.

        Args:
            prefix: Runtime name filter, or None for every container.

        Returns:
            Non-empty output lines in the order the runtime printed them.

        Raises:
            DiscoveryError: If the listing command fails.
        """
        args = ["ps", "-a", "--format", CONTAINER_LIST_FORMAT]
        if prefix:
            args.extend(["--filter", f"name={prefix}"])
        try:
            output = self._run(*args, combined=False)
        except RuntimeOperationError as err:
            raise DiscoveryError(f"failed to list containers: {err}") from err
        return [line for line in output.splitlines() if line.strip()]

    def list_networks(self, prefix: str | None = None) -> list[str]:
        """List network names, optionally filtered by *prefix*.

        Raises:
            DiscoveryError: If the listing command fails.
        """
        args = ["network", "ls", "--format", NETWORK_LIST_FORMAT]
        if prefix:
            args.extend(["--filter", f"name={prefix}"])
        try:
            output = self._run(*args, combined=False)
        except RuntimeOperationError as err:
            raise DiscoveryError(f"failed to list networks: {err}") from err
        return [line.strip() for line in output.splitlines() if line.strip()]


def runtime_from_settings(settings: KincSettings) -> RuntimeClient:
    """Build the runtime client configured by *settings*."""
    return RuntimeClient(settings.runtime)


def require_available(runtime: ContainerRuntime) -> None:
    """Gate a cluster operation on the runtime being invocable.

    Raises:
        RuntimeUnavailableError: If the runtime does not answer.
    """
    if not runtime.available():
        raise RuntimeUnavailableError("container runtime is required but not available")
