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

"""Settings, the cluster request model, and kind config loading."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kinc.constants import (
    CLUSTER_NAME_PATTERN,
    DEFAULT_CLUSTER_NAME,
    DEFAULT_CONTROL_PLANE_NODES,
    DEFAULT_NETWORK_REMOVE_RETRIES,
    DEFAULT_NETWORK_REMOVE_RETRY_WAIT_SECONDS,
    DEFAULT_NODE_IMAGE,
    DEFAULT_RUNTIME,
    DEFAULT_WORKER_NODES,
)
from kinc.errors import InvalidClusterRequestError


# ============================================================================
# Configuration classes
# ============================================================================

class KincSettings(BaseSettings):
    """Tool-wide settings, auto-loaded from KINC_* env vars.

    Attributes:
        runtime: Container runtime executable (``podman`` or a compatible CLI).
        default_cluster_name: Cluster name used when none is given.
        default_image: Node image used when ``--image`` is not given.
        default_control_plane_nodes: Control-plane count used when not given.
        default_worker_nodes: Worker count used when not given.
        allow_empty_control_plane: Whether a request with zero control-plane
            nodes is accepted.
        network_remove_retries: Attempts at removing the cluster network on delete.
        network_remove_retry_wait: Seconds between network removal attempts.
    """

    model_config = SettingsConfigDict(env_prefix="KINC_", extra="ignore")

    runtime: str = DEFAULT_RUNTIME
    default_cluster_name: str = Field(default=DEFAULT_CLUSTER_NAME, pattern=CLUSTER_NAME_PATTERN)
    default_image: str = DEFAULT_NODE_IMAGE
    default_control_plane_nodes: int = Field(default=DEFAULT_CONTROL_PLANE_NODES, ge=0)
    default_worker_nodes: int = Field(default=DEFAULT_WORKER_NODES, ge=0)
    allow_empty_control_plane: bool = True
    network_remove_retries: int = Field(default=DEFAULT_NETWORK_REMOVE_RETRIES, ge=1, le=10)
    network_remove_retry_wait: float = Field(default=DEFAULT_NETWORK_REMOVE_RETRY_WAIT_SECONDS, ge=0)


# ============================================================================
# Cluster request
# ============================================================================

class ClusterRequest(BaseModel):
    """A declarative request to create a cluster.

    Attributes:
        name: Cluster name; every resource name is derived from it.
        image: Node image reference.
        control_plane_nodes: Number of control-plane containers.
        worker_nodes: Number of worker containers.
        config_path: Optional kind-style config file, accepted but not
            interpreted by the lifecycle logic.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default=DEFAULT_CLUSTER_NAME, pattern=CLUSTER_NAME_PATTERN)
    image: str = Field(default=DEFAULT_NODE_IMAGE, min_length=1)
    control_plane_nodes: int = Field(default=DEFAULT_CONTROL_PLANE_NODES, ge=0)
    worker_nodes: int = Field(default=DEFAULT_WORKER_NODES, ge=0)
    config_path: Path | None = None


def validate_request(request: ClusterRequest, settings: KincSettings) -> None:
    """Apply the configurable validation policy to a request.

    Args:
        request: The cluster request to check.
        settings: Settings carrying the policy switches.

    Raises:
        InvalidClusterRequestError: If the request violates the policy.
    """
    if request.control_plane_nodes == 0 and not settings.allow_empty_control_plane:
        raise InvalidClusterRequestError(
            f"cluster '{request.name}' requests zero control-plane nodes "
            "(set KINC_ALLOW_EMPTY_CONTROL_PLANE=true to allow it)"
        )


def load_kind_config(path: Path) -> dict:
    """Load and sanity-check a kind-style cluster config file.

    Args:
        path: Path to the YAML config file.

    Returns:
        Parsed YAML mapping.

    Raises:
        InvalidClusterRequestError: If the file is missing, unreadable, or not a mapping.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as err:
        raise InvalidClusterRequestError(f"cannot read config file {path}: {err}") from err
    except yaml.YAMLError as err:
        raise InvalidClusterRequestError(f"config file {path} is not valid YAML: {err}") from err
    if not isinstance(data, dict):
        raise InvalidClusterRequestError(f"config file {path} must contain a YAML mapping")
    return data
