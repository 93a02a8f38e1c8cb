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

"""Get subcommands (clusters)."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from kinc.config import KincSettings
from kinc.discovery import ClusterInfo, list_clusters
from kinc.runtime import runtime_from_settings

app = typer.Typer(help="Get information about kinc resources.")

stdout = Console()


def render_clusters(infos: list[ClusterInfo]) -> Table:
    """Build the NAME/STATUS/ROLE/AGE table."""
    table = Table(box=None, pad_edge=False, show_edge=False)
    for column in ("NAME", "STATUS", "ROLE", "AGE"):
        table.add_column(column, no_wrap=True)
    for info in infos:
        table.add_row(info.name, info.status, str(info.role), info.age)
    return table


@app.command("clusters")
def clusters() -> None:
    """List all kinc clusters and their node status."""
    settings = KincSettings()
    infos = list_clusters(runtime_from_settings(settings))
    if not infos:
        stdout.print("No clusters found.")
        return
    stdout.print(render_clusters(infos))
