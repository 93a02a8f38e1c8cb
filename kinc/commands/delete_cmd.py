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

"""Delete subcommands (cluster)."""

from __future__ import annotations

import typer

from kinc.cluster import delete_cluster
from kinc.config import KincSettings
from kinc.runtime import runtime_from_settings

app = typer.Typer(help="Delete kinc resources.")


@app.command("cluster")
def cluster(
    name: str | None = typer.Argument(None, help="Cluster name (default: kinc)"),
) -> None:
    """Delete a cluster and clean up its network.

    Resources that cannot be removed are reported as warnings; the command
    still succeeds.
    """
    settings = KincSettings()
    cluster_name = name if name is not None else settings.default_cluster_name
    delete_cluster(cluster_name, runtime_from_settings(settings), settings)
