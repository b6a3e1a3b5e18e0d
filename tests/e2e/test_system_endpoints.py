from __future__ import annotations

import time

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from fleetops.main.app import create_app
from fleetops.main.container import get_container
from fleetops.shared.consts import DEFAULT_REQUIRED_DEPLOYMENT_KEYS
from tests.conftest import FakeDeploymentRuntime, FakeProbe, StaticMetricsProvider


class _StartupSweepScheduler:
    """Runs one comprehensive check at startup instead of scheduling jobs."""

    def __init__(self, container):
        self._container = container

    async def start(self):
        await self._container.health_monitor().run_comprehensive_check()

    def shutdown(self, wait: bool = False):
        return None


class _Controller:
    async def restart(self, service, force=False):
        return {"returncode": 0, "stdout": "ok", "stderr": ""}


@pytest.fixture()
def client():
    app = create_app()
    container = get_container()

    container.health_probe.override(providers.Object(FakeProbe()))
    container.system_metrics_provider.override(
        providers.Object(StaticMetricsProvider())
    )
    container.deployment_runtime.override(providers.Object(FakeDeploymentRuntime()))
    container.service_controller.override(providers.Object(_Controller()))
    container.monitoring_scheduler.override(
        providers.Object(_StartupSweepScheduler(container))
    )

    with TestClient(app) as test_client:
        yield test_client


def _wait_for_terminal(client, deployment_id, timeout=5.0):
    deadline = time.monotonic() + timeout
    while True:
        body = client.get("/deploy/status", params={"id": deployment_id}).json()
        if body["status"] in ("completed", "failed") or time.monotonic() > deadline:
            return body
        time.sleep(0.05)


def test_system_health_after_startup_sweep(client):
    response = client.get("/health/system")

    assert response.status_code == 200
    body = response.json()
    assert body["overall_status"] == "healthy"
    assert body["health_score"] == 100
    assert body["services_running"] == 7
    assert body["agents_deployed"] == 11


def test_detailed_and_target_health(client):
    detailed = client.get("/health/detailed").json()
    agents = client.get("/health/agents").json()

    assert detailed["status"] == "healthy"
    assert detailed["system_info"]["name"] == "FleetOps"
    assert agents["healthy"] == 11
    assert agents["unhealthy"] == 0


def test_full_system_deployment_runs_to_completion(client):
    config = {key: "configured" for key in DEFAULT_REQUIRED_DEPLOYMENT_KEYS}

    response = client.post(
        "/deploy/full-system", json={"environment": "staging", "config": config}
    )

    assert response.status_code == 202
    started = response.json()
    assert started["status"] == "initiated"
    assert started["tracking_url"] == f"/deploy/status?id={started['deployment_id']}"

    job = _wait_for_terminal(client, started["deployment_id"])
    assert job["status"] == "completed"
    assert job["environment"] == "staging"
    assert job["steps"][-1] == {
        "name": "Production Activation",
        "status": "completed",
        "timestamp": job["steps"][-1]["timestamp"],
    }


def test_unknown_scope_and_deployment(client):
    assert client.post("/deploy/unknown-agent").status_code == 404
    assert client.get("/deploy/status", params={"id": "deploy_nope"}).status_code == 404


def test_performance_metrics_timeframe_validation(client):
    assert client.get("/metrics/performance?timeframe=1h").status_code == 200
    assert client.get("/metrics/performance?timeframe=soon").status_code == 400


def test_restart_service(client):
    ok = client.post("/system/restart/database", json={"force": True})
    unknown = client.post("/system/restart/mainframe")

    assert ok.status_code == 200
    assert ok.json()["success"] is True
    assert unknown.status_code == 404
