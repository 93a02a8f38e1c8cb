from __future__ import annotations

import os

import pytest

from kinc.config import KincSettings
from kinc.errors import DiscoveryError, RuntimeOperationError
from kinc.runtime import ContainerSpec


class FakeRuntime:
    """In-memory stand-in for the runtime CLI.

    Mirrors podman's observable behaviour: duplicate names are rejected,
    name filters are substring matches, listings keep insertion order.
    """

    def __init__(self, available: bool = True) -> None:
        self.is_available = available
        self.networks: list[str] = []
        self.containers: dict[str, str] = {}
        self.specs: list[ContainerSpec] = []
        self.calls: list[tuple] = []
        self.fail_create: set[str] = set()
        self.fail_remove: set[str] = set()
        self.fail_stop: set[str] = set()
        self.fail_network_create = False
        self.network_remove_failures = 0
        self.fail_listing = False
        self.extra_records: list[str] = []

    def calls_named(self, op: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == op]

    def available(self) -> bool:
        self.calls.append(("available",))
        return self.is_available

    def network_exists(self, name: str) -> bool:
        self.calls.append(("network_exists", name))
        return name in self.networks

    def create_network(self, name: str) -> None:
        self.calls.append(("create_network", name))
        if self.fail_network_create or name in self.networks:
            raise RuntimeOperationError(f"podman network create {name}", "network create failed")
        self.networks.append(name)

    def remove_network(self, name: str) -> None:
        self.calls.append(("remove_network", name))
        if self.network_remove_failures > 0:
            self.network_remove_failures -= 1
            raise RuntimeOperationError(f"podman network rm {name}", "network is being used")
        if name not in self.networks:
            raise RuntimeOperationError(f"podman network rm {name}", "network not found")
        self.networks.remove(name)

    def create_container(self, spec: ContainerSpec) -> None:
        self.calls.append(("create_container", spec.name))
        if spec.name in self.fail_create:
            raise RuntimeOperationError(f"podman run {spec.name}", "image pull failed")
        if spec.name in self.containers:
            raise RuntimeOperationError(
                f"podman run {spec.name}", f'the container name "{spec.name}" is already in use'
            )
        self.containers[spec.name] = "Up 1 second"
        self.specs.append(spec)

    def stop_container(self, name: str) -> None:
        self.calls.append(("stop_container", name))
        if name in self.fail_stop or name not in self.containers:
            raise RuntimeOperationError(f"podman stop {name}", "container not running")
        self.containers[name] = "Exited (0) 1 second ago"

    def remove_container(self, name: str, force: bool = True) -> None:
        self.calls.append(("remove_container", name, force))
        if name in self.fail_remove:
            raise RuntimeOperationError(f"podman rm -f {name}", "device or resource busy")
        if name not in self.containers:
            raise RuntimeOperationError(f"podman rm -f {name}", "no such container")
        del self.containers[name]

    def list_containers(self, prefix: str | None = None) -> list[str]:
        self.calls.append(("list_containers", prefix))
        if self.fail_listing:
            raise DiscoveryError("failed to list containers: podman ps failed")
        records = [
            f"{name}\t{status}\t2 minutes ago"
            for name, status in self.containers.items()
            if prefix is None or prefix in name
        ]
        return records + self.extra_records

    def list_networks(self, prefix: str | None = None) -> list[str]:
        self.calls.append(("list_networks", prefix))
        if self.fail_listing:
            raise DiscoveryError("failed to list networks: podman network ls failed")
        return [n for n in self.networks if prefix is None or prefix in n]


@pytest.fixture(autouse=True)
def _clean_kinc_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("KINC_"):
            monkeypatch.delenv(key)


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def settings() -> KincSettings:
    return KincSettings(network_remove_retry_wait=0)
