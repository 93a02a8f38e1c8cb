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

"""Create subcommands (cluster)."""

from __future__ import annotations

from pathlib import Path

import typer

from kinc import console, logger
from kinc.cluster import create_cluster
from kinc.config import ClusterRequest, KincSettings, load_kind_config
from kinc.constants import KUBECTL_CONTEXT_PREFIX
from kinc.runtime import runtime_from_settings

app = typer.Typer(help="Create kinc resources.")


@app.command("cluster")
def cluster(
    name: str | None = typer.Argument(None, help="Cluster name (default: kinc)"),
    image: str | None = typer.Option(
        None, "--image", "-i", help="Node image to use for booting the cluster"),
    control_plane_nodes: int | None = typer.Option(
        None, "--control-plane-nodes", help="Number of control-plane nodes in the cluster"),
    worker_nodes: int | None = typer.Option(
        None, "--worker-nodes", "-w", help="Number of worker nodes in the cluster"),
    config: Path | None = typer.Option(None, "--config", help="Path to a kind config file"),
) -> None:
    """Create a new Kubernetes cluster using containers."""
    settings = KincSettings()
    request = ClusterRequest(
        name=name if name is not None else settings.default_cluster_name,
        image=image if image is not None else settings.default_image,
        control_plane_nodes=(
            control_plane_nodes if control_plane_nodes is not None else settings.default_control_plane_nodes
        ),
        worker_nodes=worker_nodes if worker_nodes is not None else settings.default_worker_nodes,
        config_path=config,
    )
    if request.config_path is not None:
        load_kind_config(request.config_path)
        logger.info("Config file %s accepted; node layout comes from flags", request.config_path)

    create_cluster(request, runtime_from_settings(settings), settings)
    console.print("You can now use kubectl to interact with your cluster:")
    console.print(f"  kubectl cluster-info --context {KUBECTL_CONTEXT_PREFIX}{request.name}")
