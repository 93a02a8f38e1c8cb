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

"""Cluster discovery for listing, derived from live runtime state."""

from __future__ import annotations

from dataclasses import dataclass

from kinc import logger
from kinc.constants import LISTING_FIELD_SEPARATOR, LISTING_MIN_FIELDS, NETWORK_PREFIX
from kinc.naming import Role, belongs_to_cluster, classify_role, cluster_from_network, is_node_name
from kinc.runtime import ContainerRuntime, require_available


@dataclass(frozen=True)
class ClusterInfo:
    """One node container as reported by the runtime.

    Attributes:
        name: Container name, verbatim.
        status: Runtime status string, verbatim.
        role: Role classified from the name.
        age: Human-readable creation age, verbatim.
    """

    name: str
    status: str
    role: Role
    age: str


def parse_record(record: str) -> ClusterInfo | None:
    """Parse a ``name<TAB>status<TAB>age`` record, or None if it is malformed."""
    parts = record.split(LISTING_FIELD_SEPARATOR)
    if len(parts) < LISTING_MIN_FIELDS:
        return None
    name, status, age = (part.strip() for part in parts[:LISTING_MIN_FIELDS])
    return ClusterInfo(name=name, status=status, role=classify_role(name), age=age)


def cluster_names(runtime: ContainerRuntime) -> list[str]:
    """Names of all clusters that currently own a network, in runtime order.

    Raises:
        DiscoveryError: If networks cannot be listed.
    """
    names: list[str] = []
    for network in runtime.list_networks(NETWORK_PREFIX):
        cluster = cluster_from_network(network)
        if cluster is not None and cluster not in names:
            names.append(cluster)
    return names


def list_clusters(runtime: ContainerRuntime) -> list[ClusterInfo]:
    """Snapshot every node container of every cluster.

    A container is listed when it belongs to a cluster that owns a network,
    or when its name has the node shape, so nodes left behind by a partial
    teardown stay visible after their network is gone. Rows come back in
    the order the runtime listed them; grouping and sorting are left to
    the caller.

    Args:
        runtime: Container runtime to query.

    Returns:
        One ClusterInfo per node container.

    Raises:
        RuntimeUnavailableError: If the runtime cannot be invoked.
        DiscoveryError: If the runtime listings fail.
    """
    require_available(runtime)
    clusters = cluster_names(runtime)
    infos: list[ClusterInfo] = []
    for record in runtime.list_containers():
        info = parse_record(record)
        if info is None:
            logger.debug("Skipping malformed container record: %r", record)
            continue
        if is_node_name(info.name) or any(belongs_to_cluster(info.name, cluster) for cluster in clusters):
            infos.append(info)
    return infos
