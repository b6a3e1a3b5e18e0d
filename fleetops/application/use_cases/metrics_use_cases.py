"""Use cases for metrics collection and the performance endpoint."""

from datetime import datetime, timezone
from typing import Dict, Optional

from fleetops.application.dtos.metrics_dto import MetricSampleDTO, PerformanceMetricsDTO
from fleetops.application.use_cases.alerting_use_case import AlertingEngine
from fleetops.domain.entities.deployment import DeploymentStatus
from fleetops.domain.entities.health import HealthCheckResult, PingSnapshot
from fleetops.domain.entities.metrics import MetricSample, Reading
from fleetops.domain.ports.system_metrics import ISystemMetricsProvider
from fleetops.domain.repositories.deployment_job_repository import (
    IDeploymentJobRepository,
)
from fleetops.domain.repositories.health_snapshot_repository import (
    IHealthSnapshotRepository,
)
from fleetops.domain.repositories.metrics_store import IMetricsStore
from fleetops.domain.services.metrics_analysis import (
    calculate_trends,
    parse_timeframe,
    summarize_metrics,
)
from fleetops.infrastructure.metrics.api_usage_tracker import ApiUsageTracker
from fleetops.shared import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEFRAME = "1h"


def _agent_readings(
    latest: Optional[HealthCheckResult], ping: Optional[PingSnapshot]
) -> Dict[str, Reading]:
    # The ping sweep is fresher than the comprehensive one when both exist.
    source = None
    if ping is not None and (latest is None or ping.timestamp >= latest.timestamp):
        source = ping.agents
    elif latest is not None:
        source = latest.agents
    if not source:
        return {}

    latencies = [
        r.response_time_ms for r in source.values() if r.response_time_ms is not None
    ]
    unhealthy = sum(1 for r in source.values() if not r.is_healthy)
    return {
        "total_agents": len(source),
        "healthy_agents": len(source) - unhealthy,
        "unhealthy_agents": unhealthy,
        "average_response_time_ms": (
            sum(latencies) / len(latencies) if latencies else None
        ),
    }


class MetricsCollector:
    """Builds one metric sample from every source and stores it."""

    def __init__(
        self,
        metrics_store: IMetricsStore,
        system_metrics_provider: ISystemMetricsProvider,
        snapshot_repository: IHealthSnapshotRepository,
        job_repository: IDeploymentJobRepository,
        alerting_engine: AlertingEngine,
        api_usage_tracker: ApiUsageTracker,
    ) -> None:
        self._metrics_store = metrics_store
        self._system_metrics_provider = system_metrics_provider
        self._snapshot_repository = snapshot_repository
        self._job_repository = job_repository
        self._alerting_engine = alerting_engine
        self._api_usage_tracker = api_usage_tracker

    async def _business_readings(self) -> Dict[str, Reading]:
        jobs = await self._job_repository.list(limit=10_000)
        by_status = {status: 0 for status in DeploymentStatus}
        for job in jobs:
            by_status[job.status] += 1
        return {
            "deployments_total": len(jobs),
            "deployments_running": by_status[DeploymentStatus.RUNNING]
            + by_status[DeploymentStatus.INITIALIZING],
            "deployments_completed": by_status[DeploymentStatus.COMPLETED],
            "deployments_failed": by_status[DeploymentStatus.FAILED],
            "alerts_dispatched": self._alerting_engine.dispatched_total,
            "alert_dispatch_failures": self._alerting_engine.failed_total,
        }

    async def collect(self) -> MetricSample:
        infrastructure = await self._system_metrics_provider.collect()
        latest = await self._snapshot_repository.latest()
        ping = await self._snapshot_repository.latest_ping()

        sample = MetricSample(
            timestamp=datetime.now(timezone.utc),
            system=infrastructure.as_dict(),
            agents=_agent_readings(latest, ping),
            api=self._api_usage_tracker.snapshot(),
            business=await self._business_readings(),
        )
        await self._metrics_store.record(sample)
        logger.debug(
            "metrics.collected",
            cpu_usage=infrastructure.cpu_usage,
            memory_usage=infrastructure.memory_usage,
        )
        return sample


class GetPerformanceMetricsUseCase:
    """Samples, summary and trends for a requested window."""

    def __init__(self, metrics_store: IMetricsStore) -> None:
        self._metrics_store = metrics_store

    async def execute(
        self, timeframe: str = DEFAULT_TIMEFRAME
    ) -> PerformanceMetricsDTO:
        window = parse_timeframe(timeframe)
        end = datetime.now(timezone.utc)
        start = end - window

        samples = await self._metrics_store.query(start=start, end=end)
        return PerformanceMetricsDTO(
            timeframe=timeframe,
            window_start=start,
            window_end=end,
            metrics_count=len(samples),
            performance_data=[MetricSampleDTO.from_domain(s) for s in samples],
            summary=summarize_metrics(samples),
            trends=calculate_trends(samples),
        )
