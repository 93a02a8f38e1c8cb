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

"""Cluster lifecycle: provisioning and teardown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rich.markup import escape
from rich.panel import Panel
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from kinc import console, logger
from kinc.config import ClusterRequest, KincSettings, validate_request
from kinc.constants import LISTING_FIELD_SEPARATOR
from kinc.errors import ProvisioningError, RuntimeOperationError
from kinc.naming import container_prefix, network_name, node_plan
from kinc.runtime import ContainerRuntime, ContainerSpec, require_available


# ============================================================================
# Cluster creation
# ============================================================================

def _ensure_network(runtime: ContainerRuntime, network: str) -> None:
    """Create the cluster network unless it already exists.

    Raises:
        ProvisioningError: If the network cannot be created.
    """
    if runtime.network_exists(network):
        console.print(f"[yellow]\u2139\ufe0f  Network {network} already exists, reusing[/yellow]")
        return
    try:
        runtime.create_network(network)
    except RuntimeOperationError as err:
        raise ProvisioningError("network", network, err) from err
    console.print(f"[green]\u2713 Created network: {network}[/green]")


def _create_node(runtime: ContainerRuntime, step: str, spec: ContainerSpec) -> None:
    """Start one node container, attributing any failure to *step* and the node.

    Raises:
        ProvisioningError: If the runtime refuses to create the container.
    """
    console.print(f"[yellow]   Creating {step} node: {spec.name}[/yellow]")
    try:
        runtime.create_container(spec)
    except RuntimeOperationError as err:
        raise ProvisioningError(step, spec.name, err) from err
    console.print(f"[green]\u2713 Created {step} node: {spec.name}[/green]")


def create_cluster(
    request: ClusterRequest,
    runtime: ContainerRuntime,
    settings: KincSettings | None = None,
) -> list[str]:
    """Create the network and node containers for *request*, in order.

    Nodes created before a failure are left running; run delete to clean up.

    Args:
        request: The cluster to create.
        runtime: Container runtime to drive.
        settings: Settings carrying the validation policy, or None for defaults.

    Returns:
        Names of the created node containers, in creation order.

    Raises:
        RuntimeUnavailableError: If the runtime cannot be invoked.
        InvalidClusterRequestError: If the request violates the validation policy.
        ProvisioningError: If the network or any node cannot be created.
    """
    if settings is None:
        settings = KincSettings()

    console.print(Panel.fit(f"Creating cluster '{request.name}'", style="bold blue"))
    console.print(f"[yellow]Using image: {request.image}[/yellow]")
    console.print(f"[yellow]Control plane nodes: {request.control_plane_nodes}[/yellow]")
    console.print(f"[yellow]Worker nodes: {request.worker_nodes}[/yellow]")

    require_available(runtime)
    validate_request(request, settings)

    network = network_name(request.name)
    _ensure_network(runtime, network)

    created: list[str] = []
    for role, name in node_plan(request.name, request.control_plane_nodes, request.worker_nodes):
        _create_node(runtime, str(role), ContainerSpec(name=name, network=network, image=request.image))
        created.append(name)

    logger.info("Cluster %s created with %d nodes", request.name, len(created))
    console.print(f"[green]\u2705 Cluster '{request.name}' created successfully[/green]")
    return created


# ============================================================================
# Cluster deletion
# ============================================================================

class RemovalStatus(str, Enum):
    """Outcome of removing a single resource."""

    REMOVED = "removed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ResourceResult:
    """Teardown outcome for one container or network.

    Attributes:
        kind: ``container`` or ``network``.
        name: Resource name.
        status: What happened to it.
        reason: Why it was skipped or failed, if it was.
    """

    kind: str
    name: str
    status: RemovalStatus
    reason: str | None = None


@dataclass
class TeardownReport:
    """Per-resource outcomes of a cluster deletion, in the order attempted."""

    cluster_name: str
    results: list[ResourceResult] = field(default_factory=list)

    @property
    def removed(self) -> list[ResourceResult]:
        return [r for r in self.results if r.status is RemovalStatus.REMOVED]

    @property
    def failed(self) -> list[ResourceResult]:
        return [r for r in self.results if r.status is RemovalStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed


def _discover_containers(runtime: ContainerRuntime, cluster_name: str) -> list[str]:
    """Names of the cluster's containers, in runtime order.

    The runtime's name filter is a substring match, so results are narrowed
    again to the container prefix here.
    """
    prefix = container_prefix(cluster_name)
    names: list[str] = []
    for record in runtime.list_containers(prefix):
        name = record.split(LISTING_FIELD_SEPARATOR, 1)[0].strip()
        if name.startswith(prefix):
            names.append(name)
    return names


def _remove_container(runtime: ContainerRuntime, name: str) -> ResourceResult:
    try:
        runtime.stop_container(name)
    except RuntimeOperationError as err:
        # Usually already stopped.
        logger.debug("Stop of %s failed: %s", name, err)
    try:
        runtime.remove_container(name, force=True)
    except RuntimeOperationError as err:
        console.print(f"[yellow]\u26a0\ufe0f  Failed to remove container {name}: {escape(str(err))}[/yellow]")
        return ResourceResult("container", name, RemovalStatus.FAILED, str(err))
    console.print(f"[green]\u2713 Removed container: {name}[/green]")
    return ResourceResult("container", name, RemovalStatus.REMOVED)


def _remove_network(runtime: ContainerRuntime, network: str, settings: KincSettings) -> ResourceResult:
    """Remove the cluster network, retrying while the runtime still sees it in use."""
    if not runtime.network_exists(network):
        console.print(f"[yellow]   Network {network} not found, skipping[/yellow]")
        return ResourceResult("network", network, RemovalStatus.SKIPPED, "not found")

    @retry(
        stop=stop_after_attempt(settings.network_remove_retries),
        wait=wait_fixed(settings.network_remove_retry_wait),
        retry=retry_if_exception_type(RuntimeOperationError),
        reraise=True,
    )
    def _attempt() -> None:
        runtime.remove_network(network)

    try:
        _attempt()
    except RuntimeOperationError as err:
        console.print(f"[yellow]\u26a0\ufe0f  Failed to remove network {network}: {escape(str(err))}[/yellow]")
        return ResourceResult("network", network, RemovalStatus.FAILED, str(err))
    console.print(f"[green]\u2713 Removed network: {network}[/green]")
    return ResourceResult("network", network, RemovalStatus.REMOVED)


def delete_cluster(
    cluster_name: str,
    runtime: ContainerRuntime,
    settings: KincSettings | None = None,
) -> TeardownReport:
    """Remove every container and the network of *cluster_name*.

    Individual removal failures are recorded in the report and never stop
    the remaining removals.

    Args:
        cluster_name: Cluster to delete.
        runtime: Container runtime to drive.
        settings: Settings carrying the network retry policy, or None for defaults.

    Returns:
        The teardown report.

    Raises:
        RuntimeUnavailableError: If the runtime cannot be invoked.
        DiscoveryError: If the cluster's containers cannot be listed.
    """
    if settings is None:
        settings = KincSettings()

    console.print(Panel.fit(f"Deleting cluster '{cluster_name}'", style="bold blue"))
    require_available(runtime)

    report = TeardownReport(cluster_name)
    containers = _discover_containers(runtime, cluster_name)
    if not containers:
        console.print(f"[yellow]\u2139\ufe0f  No containers found for cluster '{cluster_name}'[/yellow]")

    for name in containers:
        report.results.append(_remove_container(runtime, name))

    report.results.append(_remove_network(runtime, network_name(cluster_name), settings))

    if report.ok:
        console.print(f"[green]\u2705 Cluster '{cluster_name}' deleted[/green]")
    else:
        console.print(
            f"[yellow]\u26a0\ufe0f  Cluster '{cluster_name}' deleted with {len(report.failed)} "
            "resource(s) left behind[/yellow]"
        )
    return report
