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

"""
cli.py - kinc, Kubernetes clusters in containers.

Subcommands:
    create     Create resources (cluster)
    delete     Delete resources (cluster)
    get        Show resources (clusters)

Environment Variables:
    Defaults can be overridden via KINC_* environment variables:
    - KINC_RUNTIME (default: podman)
    - KINC_DEFAULT_IMAGE (default: kindest/node:v1.31.2)
    - KINC_ALLOW_EMPTY_CONTROL_PLANE (default: true)
    - And more (see KincSettings for the full list)

Examples:
    # Single-node cluster named "kinc"
    kinc create cluster

    # One control plane and two workers
    kinc create cluster demo --control-plane-nodes 1 --worker-nodes 2

    # List nodes of every cluster
    kinc get clusters

    # Delete cluster
    kinc delete cluster demo
"""

from __future__ import annotations

import logging
import sys

import typer
from rich.markup import escape

from kinc import console
from kinc.commands import create_cmd, delete_cmd, get_cmd

app = typer.Typer(
    help="kinc (Kubernetes in Container) runs local Kubernetes clusters in podman containers.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every runtime command"),
) -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.add_typer(create_cmd.app, name="create")
app.add_typer(delete_cmd.app, name="delete")
app.add_typer(get_cmd.app, name="get")


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]\u274c {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
