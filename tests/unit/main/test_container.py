from __future__ import annotations

import pytest
from dependency_injector import providers

from fleetops.domain.entities.alert import ThresholdResource
from fleetops.infrastructure.notifications import (
    LogNotificationChannel,
    WebhookNotificationChannel,
)
from fleetops.main.config import AppSettings
from fleetops.main.container import (
    app_lifespan,
    build_service_endpoints,
    build_thresholds,
    get_container,
    init_container,
)


class _StubScheduler:
    def __init__(self) -> None:
        self.events = []

    async def start(self) -> None:
        self.events.append("start")

    def shutdown(self, wait: bool = False) -> None:
        self.events.append("shutdown")


@pytest.mark.asyncio
async def test_init_and_get_container() -> None:
    container = init_container(AppSettings())
    assert get_container() is container

    scheduler = _StubScheduler()
    container.monitoring_scheduler.override(providers.Object(scheduler))

    async with app_lifespan() as yielded:
        assert yielded is container
        assert scheduler.events == ["start"]

    assert scheduler.events == ["start", "shutdown"]


def test_long_lived_engines_are_singletons() -> None:
    container = init_container(AppSettings())

    assert container.health_monitor() is container.health_monitor()
    assert container.alerting_engine() is container.alerting_engine()
    assert (
        container.deployment_orchestrator().health_monitor
        is container.health_monitor()
    )


def test_channels_follow_configured_webhooks(monkeypatch) -> None:
    monkeypatch.setenv("ALERT_URGENT_WEBHOOK_URL", "https://hooks.example/urgent")
    container = init_container(AppSettings())

    engine = container.alerting_engine()

    assert isinstance(engine.primary_channel, LogNotificationChannel)
    assert isinstance(engine.urgent_channel, WebhookNotificationChannel)


def test_build_thresholds_covers_every_resource() -> None:
    thresholds = build_thresholds(AppSettings().alerts.model_dump())

    assert set(thresholds) == set(ThresholdResource)
    assert thresholds[ThresholdResource.DISK_USAGE].critical == 95


def test_explicit_service_urls_override_defaults() -> None:
    endpoints = build_service_endpoints(
        "http://api:8000/",
        ["database", "voice_engine"],
        {"database": "postgres://ignored", "cache": "redis://cache:6379"},
    )

    assert endpoints == {
        "database": "postgres://ignored",
        "voice_engine": "http://api:8000/api/services/voice_engine/health",
        "cache": "redis://cache:6379",
    }


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("fleetops.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
