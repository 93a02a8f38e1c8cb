from __future__ import annotations

import pytest
from typer.testing import CliRunner

from kinc.cli import app
from kinc.commands import create_cmd, delete_cmd, get_cmd
from kinc.errors import ProvisioningError, RuntimeUnavailableError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _fake_runtime(monkeypatch, runtime):
    for module in (create_cmd, delete_cmd, get_cmd):
        monkeypatch.setattr(module, "runtime_from_settings", lambda settings: runtime)
    monkeypatch.setenv("KINC_NETWORK_REMOVE_RETRY_WAIT", "0")


def test_top_level_commands_exist():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("create", "delete", "get"):
        assert command in result.output


def test_create_demo_cluster(runtime):
    result = runner.invoke(app, ["create", "cluster", "demo", "--control-plane-nodes", "1", "--worker-nodes", "2"])

    assert result.exit_code == 0, result.output
    assert runtime.networks == ["kinc-demo"]
    assert list(runtime.containers) == ["demo-control-plane", "demo-worker-1", "demo-worker-2"]
    assert "kubectl cluster-info --context kinc-demo" in result.output


def test_create_uses_defaults(runtime):
    result = runner.invoke(app, ["create", "cluster"])

    assert result.exit_code == 0, result.output
    assert list(runtime.containers) == ["kinc-control-plane"]
    assert runtime.specs[0].image == "kindest/node:v1.31.2"


def test_create_short_flags(runtime):
    result = runner.invoke(app, ["create", "cluster", "lab", "-i", "example/node:2", "-w", "1"])

    assert result.exit_code == 0, result.output
    assert list(runtime.containers) == ["lab-control-plane", "lab-worker-1"]
    assert {spec.image for spec in runtime.specs} == {"example/node:2"}


def test_create_defaults_from_env(monkeypatch, runtime):
    monkeypatch.setenv("KINC_DEFAULT_CLUSTER_NAME", "envcluster")
    monkeypatch.setenv("KINC_DEFAULT_WORKER_NODES", "1")

    result = runner.invoke(app, ["create", "cluster"])

    assert result.exit_code == 0, result.output
    assert list(runtime.containers) == ["envcluster-control-plane", "envcluster-worker-1"]


def test_create_accepts_config_file(tmp_path, runtime):
    config = tmp_path / "kind.yaml"
    config.write_text("kind: Cluster\n")

    result = runner.invoke(app, ["create", "cluster", "demo", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert list(runtime.containers) == ["demo-control-plane"]


def test_create_rejects_missing_config_file(tmp_path, runtime):
    result = runner.invoke(app, ["create", "cluster", "demo", "--config", str(tmp_path / "nope.yaml")])

    assert result.exit_code != 0
    assert runtime.calls == []


def test_create_failure_exits_non_zero(runtime):
    runtime.fail_create.add("demo-worker-1")

    result = runner.invoke(app, ["create", "cluster", "demo", "-w", "2"])

    assert result.exit_code != 0
    assert isinstance(result.exception, ProvisioningError)
    assert "demo-worker-1" in str(result.exception)


def test_create_without_runtime(runtime):
    runtime.is_available = False

    result = runner.invoke(app, ["create", "cluster"])

    assert isinstance(result.exception, RuntimeUnavailableError)


def test_get_clusters_table(runtime):
    runner.invoke(app, ["create", "cluster", "demo", "--worker-nodes", "2"])

    result = runner.invoke(app, ["get", "clusters"])

    assert result.exit_code == 0, result.output
    lines = [line.split() for line in result.stdout.strip().splitlines()]
    assert lines[0] == ["NAME", "STATUS", "ROLE", "AGE"]
    rows = {line[0]: line for line in lines[1:]}
    assert set(rows) == {"demo-control-plane", "demo-worker-1", "demo-worker-2"}
    assert "control-plane" in rows["demo-control-plane"]
    assert "worker" in rows["demo-worker-2"]


def test_get_clusters_empty():
    result = runner.invoke(app, ["get", "clusters"])

    assert result.exit_code == 0
    assert "No clusters found." in result.stdout


def test_delete_cluster(runtime):
    runner.invoke(app, ["create", "cluster", "demo", "-w", "1"])

    result = runner.invoke(app, ["delete", "cluster", "demo"])

    assert result.exit_code == 0, result.output
    assert runtime.containers == {}
    assert runtime.networks == []


def test_delete_default_cluster_name(runtime):
    runner.invoke(app, ["create", "cluster"])

    result = runner.invoke(app, ["delete", "cluster"])

    assert result.exit_code == 0, result.output
    assert runtime.containers == {}


def test_delete_succeeds_despite_removal_failures(runtime):
    runner.invoke(app, ["create", "cluster", "demo", "-w", "2"])
    runtime.fail_remove.add("demo-worker-1")

    result = runner.invoke(app, ["delete", "cluster", "demo"])

    assert result.exit_code == 0, result.output
    assert list(runtime.containers) == ["demo-worker-1"]
    assert "Failed to remove container demo-worker-1" in result.output
