from __future__ import annotations

import pytest
from dependency_injector import providers

from fleetops.main import app as module_app
from fleetops.main.app import create_app
from fleetops.main.container import get_container


class _StubScheduler:
    def __init__(self) -> None:
        self.started = False
        self.stopped = False

    async def start(self) -> None:
        self.started = True

    def shutdown(self, wait: bool = False) -> None:
        self.stopped = True


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan() -> None:
    app = create_app()
    assert app.title == "FleetOps"

    scheduler = _StubScheduler()
    get_container().monitoring_scheduler.override(providers.Object(scheduler))

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None
        assert scheduler.started is True

    assert scheduler.stopped is True
    # Ensure module-level app is instantiated
    assert isinstance(module_app.app, type(app))


def test_routes_are_registered() -> None:
    app = create_app()
    paths = {route.path for route in app.routes}

    assert {
        "/deploy/full-system",
        "/deploy/agent/{agent_id}",
        "/deploy/status",
        "/health/system",
        "/health/detailed",
        "/metrics/performance",
        "/system/restart/{service}",
    } <= paths
