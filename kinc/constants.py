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

"""Defaults, naming prefixes, and the node container shape."""

from __future__ import annotations

# -- Cluster defaults --
DEFAULT_CLUSTER_NAME = "kinc"
DEFAULT_NODE_IMAGE = "kindest/node:v1.31.2"
DEFAULT_CONTROL_PLANE_NODES = 1
DEFAULT_WORKER_NODES = 0
DEFAULT_RUNTIME = "podman"

# -- Naming --
NETWORK_PREFIX = "kinc-"
KUBECTL_CONTEXT_PREFIX = "kinc-"
ROLE_CONTROL_PLANE = "control-plane"
ROLE_WORKER = "worker"
CLUSTER_NAME_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$"
NODE_NAME_PATTERN = r"-(control-plane(-\d+)?|worker-\d+)$"

# -- Node container shape --
NODE_TMPFS_MOUNTS = ("/tmp", "/run", "/run/lock")
NODE_CGROUP_HOST_PATH = "/sys/fs/cgroup"
NODE_CGROUP_CONTAINER_PATH = "/sys/fs/cgroup"
NODE_CGROUP_MOUNT_MODE = "rw"
NODE_CGROUP_NAMESPACE = "host"
NODE_RESTART_POLICY = "unless-stopped"
NODE_ENTRYPOINT = "/usr/local/bin/entrypoint"
NODE_COMMAND = ("/sbin/init",)

# -- Runtime listing formats --
CONTAINER_LIST_FORMAT = "{{.Names}}\t{{.Status}}\t{{.CreatedHuman}}"
NETWORK_LIST_FORMAT = "{{.Name}}"
LISTING_FIELD_SEPARATOR = "\t"
LISTING_MIN_FIELDS = 3

# -- Teardown --
DEFAULT_NETWORK_REMOVE_RETRIES = 3
DEFAULT_NETWORK_REMOVE_RETRY_WAIT_SECONDS = 1.0
