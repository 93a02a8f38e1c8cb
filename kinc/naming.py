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

"""Deterministic resource names and their inverse.

kinc keeps no state of its own: every listing and teardown re-discovers a
cluster from the live runtime by these names, so each function here must
stay stable across releases.
"""

from __future__ import annotations

import re
from enum import Enum

from kinc.constants import NETWORK_PREFIX, NODE_NAME_PATTERN, ROLE_CONTROL_PLANE, ROLE_WORKER


class Role(str, Enum):
    """Node role, as shown in the ROLE column."""

    CONTROL_PLANE = ROLE_CONTROL_PLANE
    WORKER = ROLE_WORKER

    def __str__(self) -> str:
        return self.value


def network_name(cluster_name: str) -> str:
    """Return the name of the cluster's network (``kinc-<cluster>``)."""
    return f"{NETWORK_PREFIX}{cluster_name}"


def cluster_from_network(name: str) -> str | None:
    """Recover the cluster name from a network name, or None if it is not one of ours."""
    if not name.startswith(NETWORK_PREFIX) or len(name) == len(NETWORK_PREFIX):
        return None
    return name[len(NETWORK_PREFIX):]


def container_prefix(cluster_name: str) -> str:
    """Return the prefix shared by all of a cluster's node containers."""
    return f"{cluster_name}-"


def control_plane_name(cluster_name: str, index: int, total: int) -> str:
    """Name of the control-plane node at zero-based *index*.

    A cluster with exactly one control plane gets an unnumbered
    ``<cluster>-control-plane``; otherwise nodes are numbered from 1.

    Args:
        cluster_name: Owning cluster.
        index: Zero-based node index.
        total: Number of control-plane nodes in the cluster.

    Returns:
        The container name.
    """
    base = f"{cluster_name}-{ROLE_CONTROL_PLANE}"
    if total == 1:
        return base
    return f"{base}-{index + 1}"


def worker_name(cluster_name: str, index: int) -> str:
    """Name of the worker node at zero-based *index*; always numbered from 1."""
    return f"{cluster_name}-{ROLE_WORKER}-{index + 1}"


def node_plan(cluster_name: str, control_planes: int, workers: int) -> list[tuple[Role, str]]:
    """Every node of a cluster as (role, name), in creation order (control planes first)."""
    plan = [
        (Role.CONTROL_PLANE, control_plane_name(cluster_name, i, control_planes))
        for i in range(control_planes)
    ]
    plan.extend((Role.WORKER, worker_name(cluster_name, i)) for i in range(workers))
    return plan


def is_node_name(resource_name: str) -> bool:
    """Whether a name has the shape of a node container, whatever its cluster."""
    return re.search(NODE_NAME_PATTERN, resource_name) is not None


def classify_role(resource_name: str) -> Role:
    """Classify a node by substring match on ``control-plane``.

    This is a heuristic, not a parser: a cluster called e.g.
    ``my-control-plane-lab`` has all of its workers reported as control planes.
    """
    if ROLE_CONTROL_PLANE in resource_name:
        return Role.CONTROL_PLANE
    return Role.WORKER


def belongs_to_cluster(resource_name: str, cluster_name: str) -> bool:
    """Whether a container or network name belongs to *cluster_name*.

    Containers match by ``<cluster>-`` prefix, so cluster ``demo`` also
    claims the nodes of a cluster called ``demo-a``. The network matches by
    exact name only; ``kinc-demo-*`` containers belong to cluster ``kinc-demo``.
    """
    return (
        resource_name.startswith(container_prefix(cluster_name))
        or resource_name == network_name(cluster_name)
    )
