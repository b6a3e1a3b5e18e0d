"""Use cases for health sweeps and the health endpoints."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from fleetops.application.dtos.health_dto import (
    DetailedHealthDTO,
    HealthCheckResultDTO,
    SystemHealthDTO,
    TargetsHealthDTO,
)
from fleetops.application.models import SystemInfo
from fleetops.application.use_cases.alerting_use_case import AlertingEngine
from fleetops.domain.entities.errors import ProbeError
from fleetops.domain.entities.health import (
    HealthCheckResult,
    HealthObservation,
    InfrastructureSnapshot,
    PingSnapshot,
    ProbeResult,
    ProbeTarget,
    TargetKind,
)
from fleetops.domain.ports.health_probe import IHealthProbe
from fleetops.domain.ports.system_metrics import ISystemMetricsProvider
from fleetops.domain.repositories.health_snapshot_repository import (
    IHealthSnapshotRepository,
)
from fleetops.domain.repositories.metrics_store import IMetricsStore
from fleetops.domain.services.health_evaluation import build_health_check_result
from fleetops.domain.services.metrics_analysis import calculate_trends
from fleetops.shared import get_logger

logger = get_logger(__name__)


class HealthMonitor:
    """Health aggregator and scorer.

    Fans probes out over every service and agent at once; each probe is
    bounded by ``probe_timeout`` so one hung target cannot stretch the sweep.
    """

    def __init__(
        self,
        probe: IHealthProbe,
        alerting_engine: AlertingEngine,
        snapshot_repository: IHealthSnapshotRepository,
        system_metrics_provider: ISystemMetricsProvider,
        service_endpoints: Mapping[str, str],
        agent_roster: Sequence[str],
        agent_health_url_template: str,
        probe_timeout: float = 5.0,
    ):
        self._probe = probe
        self._alerting_engine = alerting_engine
        self._snapshot_repository = snapshot_repository
        self._system_metrics_provider = system_metrics_provider
        self._service_endpoints = dict(service_endpoints)
        self._agent_roster = tuple(agent_roster)
        self._agent_health_url_template = agent_health_url_template
        self._probe_timeout = probe_timeout

    @property
    def service_names(self) -> Tuple[str, ...]:
        return tuple(self._service_endpoints)

    @property
    def agent_ids(self) -> Tuple[str, ...]:
        return self._agent_roster

    def service_targets(self) -> List[ProbeTarget]:
        return [
            ProbeTarget(name=name, kind=TargetKind.SERVICE, url=url)
            for name, url in self._service_endpoints.items()
        ]

    def agent_target(self, agent_id: str) -> ProbeTarget:
        return ProbeTarget(
            name=agent_id,
            kind=TargetKind.AGENT,
            url=self._agent_health_url_template.format(agent_id=agent_id),
        )

    def agent_targets(
        self, agent_ids: Optional[Iterable[str]] = None
    ) -> List[ProbeTarget]:
        ids = self._agent_roster if agent_ids is None else tuple(agent_ids)
        return [self.agent_target(agent_id) for agent_id in ids]

    async def probe(self, target: ProbeTarget) -> ProbeResult:
        """Probe one target. Never raises; failures become unhealthy results."""
        try:
            return await asyncio.wait_for(
                self._probe.check(target), timeout=self._probe_timeout
            )
        except asyncio.TimeoutError:
            return ProbeResult.unhealthy(
                f"Probe timed out after {self._probe_timeout:g}s"
            )
        except Exception as exc:
            error = ProbeError(target.name, str(exc), details={"url": target.url})
            logger.warning(
                "health.probe.error",
                target=target.name,
                kind=target.kind.value,
                error=error.message,
            )
            return ProbeResult.unhealthy(error.message)

    async def probe_many(
        self, targets: Sequence[ProbeTarget]
    ) -> Dict[str, ProbeResult]:
        results = await asyncio.gather(*(self.probe(target) for target in targets))
        return {target.name: result for target, result in zip(targets, results)}

    async def _collect_infrastructure(self) -> InfrastructureSnapshot:
        try:
            return await self._system_metrics_provider.collect()
        except Exception as exc:
            logger.error("health.infrastructure.unavailable", error=str(exc))
            return InfrastructureSnapshot()

    async def sweep(self) -> HealthObservation:
        """Probe every service and agent and read the infrastructure snapshot."""
        services = self.service_targets()
        agents = self.agent_targets()

        timestamp = datetime.now(timezone.utc)
        service_results, agent_results, infrastructure = await asyncio.gather(
            self.probe_many(services),
            self.probe_many(agents),
            self._collect_infrastructure(),
        )
        return HealthObservation(
            services=service_results,
            agents=agent_results,
            infrastructure=infrastructure,
            timestamp=timestamp,
        )

    async def run_comprehensive_check(self) -> HealthCheckResult:
        """One full health sweep: probe, evaluate, publish, then notify."""
        logger.info(
            "health.sweep.started",
            services=len(self._service_endpoints),
            agents=len(self._agent_roster),
        )
        observation = await self.sweep()
        alerts = self._alerting_engine.evaluate(observation)
        result = build_health_check_result(observation, alerts)

        await self._snapshot_repository.save(result)
        logger.info(
            "health.sweep.completed",
            overall_status=result.overall_status.value,
            health_score=result.health_score,
            alerts=len(alerts),
        )

        if alerts:
            await self._alerting_engine.dispatch(alerts)
        return result

    async def run_quick_check(self) -> PingSnapshot:
        """Lightweight ping of every target; no alerts, no infrastructure."""
        services, agents = await asyncio.gather(
            self.probe_many(self.service_targets()),
            self.probe_many(self.agent_targets()),
        )
        snapshot = PingSnapshot(services=services, agents=agents)
        await self._snapshot_repository.save_ping(snapshot)
        logger.debug(
            "health.ping.completed", reachable=snapshot.reachable, total=snapshot.total
        )
        return snapshot

    async def verify(
        self, agent_ids: Sequence[str], include_services: bool = True
    ) -> Dict[str, ProbeResult]:
        """Probe the given agents (and services); return the unhealthy ones."""
        targets = self.agent_targets(agent_ids)
        if include_services:
            targets = self.service_targets() + targets
        results = await self.probe_many(targets)
        return {name: r for name, r in results.items() if not r.is_healthy}


class GetSystemHealthUseCase:
    """Summary for ``GET /health/system``."""

    def __init__(
        self,
        snapshot_repository: IHealthSnapshotRepository,
        system_info: SystemInfo,
        agent_roster: Sequence[str],
    ) -> None:
        self._snapshot_repository = snapshot_repository
        self._info = system_info
        self._agent_roster = tuple(agent_roster)

    async def execute(self, started_at: Optional[datetime]) -> SystemHealthDTO:
        latest = await self._snapshot_repository.latest()
        ping = await self._snapshot_repository.latest_ping()

        now = datetime.now(timezone.utc)
        started = started_at or now
        return SystemHealthDTO.build(
            latest=latest,
            ping=ping,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            system_version=self._info.version,
            environment=self._info.environment,
            agents_deployed=len(self._agent_roster),
        )


class GetDetailedHealthUseCase:
    """Full last snapshot plus recent performance trends."""

    def __init__(
        self,
        snapshot_repository: IHealthSnapshotRepository,
        metrics_store: IMetricsStore,
        system_info: SystemInfo,
        trend_window: timedelta = timedelta(hours=1),
    ) -> None:
        self._snapshot_repository = snapshot_repository
        self._metrics_store = metrics_store
        self._info = system_info
        self._trend_window = trend_window

    async def execute(self) -> DetailedHealthDTO:
        latest = await self._snapshot_repository.latest()
        system_info = {
            "name": self._info.title,
            "version": self._info.version,
            "environment": self._info.environment,
            "git_commit": self._info.git_commit,
            "build_time": self._info.build_time,
        }
        if latest is None:
            return DetailedHealthDTO(
                status="initializing",
                message="No health data available. System initializing...",
                system_info=system_info,
            )

        since = datetime.now(timezone.utc) - self._trend_window
        samples = await self._metrics_store.query(start=since)
        return DetailedHealthDTO(
            status=latest.overall_status.value,
            last_check=HealthCheckResultDTO.from_domain(latest),
            performance_trends=calculate_trends(samples),
            system_info=system_info,
        )


class GetTargetsHealthUseCase:
    """Per-service or per-agent status maps from the last snapshot."""

    def __init__(self, snapshot_repository: IHealthSnapshotRepository) -> None:
        self._snapshot_repository = snapshot_repository

    async def execute(self, kind: TargetKind) -> TargetsHealthDTO:
        latest = await self._snapshot_repository.latest()
        if latest is None:
            return TargetsHealthDTO(kind=kind, last_check=None, targets={})
        results = latest.services if kind is TargetKind.SERVICE else latest.agents
        return TargetsHealthDTO.from_results(kind, latest.timestamp, results)
