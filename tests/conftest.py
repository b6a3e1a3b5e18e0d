from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pytest

from fleetops.application.use_cases.alerting_use_case import AlertingEngine
from fleetops.application.use_cases.health_use_cases import HealthMonitor
from fleetops.domain.entities.alert import AlertThreshold, ThresholdResource
from fleetops.domain.entities.deployment import DeploymentScope
from fleetops.domain.entities.health import (
    InfrastructureSnapshot,
    ProbeResult,
    ProbeTarget,
)
from fleetops.domain.entities.metrics import MetricSample
from fleetops.infrastructure.repositories import (
    InMemoryDeploymentJobRepository,
    InMemoryHealthSnapshotRepository,
    InMemoryMetricsStore,
)

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SERVICES = {
    "database": "http://svc/database",
    "voice_engine": "http://svc/voice_engine",
    "email_system": "http://svc/email_system",
}
AGENTS = ("lexi-pro", "paymaster", "med-assist", "edu-kids", "gov-connect")
REQUIRED_KEYS = ("SUPABASE_URL", "CLAUDE_API_KEY")
CORE_SERVICES = ("voice-processing", "email-automation", "payment-processing")


def metric_sample(minutes_ago: float = 0, **system: Any) -> MetricSample:
    return MetricSample(
        timestamp=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        system=system,
    )


class FakeProbe:
    """Answers from a per-target table; unknown targets are healthy."""

    def __init__(
        self,
        results: Optional[Mapping[str, ProbeResult]] = None,
        delays: Optional[Mapping[str, float]] = None,
        errors: Optional[Mapping[str, Exception]] = None,
    ) -> None:
        self.results = dict(results or {})
        self.delays = dict(delays or {})
        self.errors = dict(errors or {})
        self.calls: List[ProbeTarget] = []

    async def check(self, target: ProbeTarget) -> ProbeResult:
        self.calls.append(target)
        if target.name in self.delays:
            await asyncio.sleep(self.delays[target.name])
        if target.name in self.errors:
            raise self.errors[target.name]
        return self.results.get(target.name, ProbeResult.healthy(response_time_ms=12.0))


@dataclass
class RecordingChannel:
    name: str = "primary"
    fail_on_calls: Tuple[int, ...] = ()
    sent: List[Tuple[str, str]] = field(default_factory=list)
    calls: int = 0

    async def send(self, subject: str, message: str) -> None:
        self.calls += 1
        if self.calls in self.fail_on_calls:
            raise RuntimeError(f"{self.name} unavailable")
        self.sent.append((subject, message))


@dataclass
class StaticMetricsProvider:
    snapshot: InfrastructureSnapshot = field(
        default_factory=lambda: InfrastructureSnapshot(
            cpu_usage=20.0, memory_usage=40.0, disk_usage=50.0, active_connections=8
        )
    )
    error: Optional[Exception] = None

    async def collect(self) -> InfrastructureSnapshot:
        if self.error is not None:
            raise self.error
        return self.snapshot


class FakeDeploymentRuntime:
    """Records every runtime call; ``fail_on`` maps a call to an exception."""

    def __init__(self, fail_on: Optional[Dict[Tuple[str, Any], Exception]] = None):
        self.fail_on = dict(fail_on or {})
        self.calls: List[Tuple[str, Any]] = []

    async def _call(self, name: str, arg: Any = None) -> None:
        self.calls.append((name, arg))
        error = self.fail_on.get((name, arg)) or self.fail_on.get((name, None))
        if error is not None:
            raise error

    async def setup_environment(
        self, environment: str, config: Mapping[str, Any]
    ) -> None:
        await self._call("setup_environment", environment)

    async def run_migrations(self) -> None:
        await self._call("run_migrations")

    async def deploy_service(self, service: str) -> None:
        await self._call("deploy_service", service)

    async def load_agent_config(self, agent_id: str) -> Dict[str, Any]:
        await self._call("load_agent_config", agent_id)
        return {"id": agent_id}

    async def provision_agent(self, agent_id: str, config: Mapping[str, Any]) -> None:
        await self._call("provision_agent", agent_id)

    async def configure_agent_endpoints(
        self, agent_id: str, config: Mapping[str, Any]
    ) -> None:
        await self._call("configure_agent_endpoints", agent_id)

    async def self_test_agent(self, agent_id: str) -> None:
        await self._call("self_test_agent", agent_id)

    async def mark_agent_deployed(self, agent_id: str) -> None:
        await self._call("mark_agent_deployed", agent_id)

    async def run_integration_tests(self, scope: DeploymentScope) -> None:
        await self._call("run_integration_tests", scope.label)

    async def activate(self, environment: str) -> None:
        await self._call("activate", environment)

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


def default_thresholds() -> Dict[ThresholdResource, AlertThreshold]:
    bounds = {
        ThresholdResource.RESPONSE_TIME: (2000, 5000),
        ThresholdResource.ERROR_RATE: (0.05, 0.1),
        ThresholdResource.CPU_USAGE: (70, 85),
        ThresholdResource.MEMORY_USAGE: (80, 90),
        ThresholdResource.DISK_USAGE: (85, 95),
    }
    return {
        resource: AlertThreshold(resource=resource, warning=w, critical=c)
        for resource, (w, c) in bounds.items()
    }


@pytest.fixture()
def primary_channel() -> RecordingChannel:
    return RecordingChannel(name="primary")


@pytest.fixture()
def urgent_channel() -> RecordingChannel:
    return RecordingChannel(name="urgent")


@pytest.fixture()
def alerting_engine(primary_channel, urgent_channel) -> AlertingEngine:
    return AlertingEngine(
        thresholds=default_thresholds(),
        primary_channel=primary_channel,
        urgent_channel=urgent_channel,
    )


@pytest.fixture()
def snapshot_repository() -> InMemoryHealthSnapshotRepository:
    return InMemoryHealthSnapshotRepository()


@pytest.fixture()
def job_repository() -> InMemoryDeploymentJobRepository:
    return InMemoryDeploymentJobRepository()


@pytest.fixture()
def metrics_store() -> InMemoryMetricsStore:
    return InMemoryMetricsStore(capacity=50)


@pytest.fixture()
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture()
def metrics_provider() -> StaticMetricsProvider:
    return StaticMetricsProvider()


def build_monitor(
    probe: Any,
    alerting_engine: AlertingEngine,
    snapshot_repository: InMemoryHealthSnapshotRepository,
    metrics_provider: Any,
    *,
    services: Optional[Mapping[str, str]] = None,
    agents: Sequence[str] = AGENTS,
    probe_timeout: float = 5.0,
) -> HealthMonitor:
    return HealthMonitor(
        probe=probe,
        alerting_engine=alerting_engine,
        snapshot_repository=snapshot_repository,
        system_metrics_provider=metrics_provider,
        service_endpoints=SERVICES if services is None else services,
        agent_roster=agents,
        agent_health_url_template="http://api/api/agents/{agent_id}/health",
        probe_timeout=probe_timeout,
    )


@pytest.fixture()
def health_monitor(
    fake_probe, alerting_engine, snapshot_repository, metrics_provider
) -> HealthMonitor:
    return build_monitor(
        fake_probe, alerting_engine, snapshot_repository, metrics_provider
    )
