"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dependency_injector import containers, providers

from fleetops.application.models import SystemInfo
from fleetops.application.use_cases.alerting_use_case import AlertingEngine
from fleetops.application.use_cases.deployment_use_case import (
    DeploymentOrchestrator,
    DeploymentStatusUseCase,
)
from fleetops.application.use_cases.health_use_cases import (
    GetDetailedHealthUseCase,
    GetSystemHealthUseCase,
    GetTargetsHealthUseCase,
    HealthMonitor,
)
from fleetops.application.use_cases.metrics_use_cases import (
    GetPerformanceMetricsUseCase,
    MetricsCollector,
)
from fleetops.application.use_cases.system_use_cases import RestartServiceUseCase
from fleetops.domain.entities.alert import AlertThreshold, ThresholdResource
from fleetops.domain.ports.notification_channel import INotificationChannel
from fleetops.infrastructure.metrics import ApiUsageTracker, PsutilSystemMetricsProvider
from fleetops.infrastructure.notifications import (
    LogNotificationChannel,
    WebhookNotificationChannel,
)
from fleetops.infrastructure.probes import SchemeRoutingHealthProbe
from fleetops.infrastructure.repositories import (
    InMemoryDeploymentJobRepository,
    InMemoryHealthSnapshotRepository,
    InMemoryMetricsStore,
)
from fleetops.infrastructure.runtime import (
    ShellDeploymentRuntime,
    ShellServiceController,
)
from fleetops.infrastructure.services import MonitoringIntervals, MonitoringScheduler
from fleetops.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def build_thresholds(
    alerts: Mapping[str, Any],
) -> Dict[ThresholdResource, AlertThreshold]:
    return {
        resource: AlertThreshold(
            resource=resource,
            warning=alerts[f"{resource.value}_warning"],
            critical=alerts[f"{resource.value}_critical"],
        )
        for resource in ThresholdResource
    }


def build_primary_channel(url: Optional[str], timeout: float) -> INotificationChannel:
    if not url:
        return LogNotificationChannel(name="log")
    return WebhookNotificationChannel("primary", url, timeout=timeout)


def build_urgent_channel(
    url: Optional[str], timeout: float
) -> Optional[INotificationChannel]:
    if not url:
        return None
    return WebhookNotificationChannel("urgent", url, timeout=timeout)


def build_service_endpoints(
    api_base_url: str, service_names: Iterable[str], services: Mapping[str, str]
) -> Dict[str, str]:
    """Explicit service URLs win over the platform API default."""
    base = api_base_url.rstrip("/")
    endpoints = {name: f"{base}/api/services/{name}/health" for name in service_names}
    endpoints.update(services or {})
    return endpoints


def build_agent_health_url_template(api_base_url: str) -> str:
    return f"{api_base_url.rstrip('/')}/api/agents/{{agent_id}}/health"


def build_restartable_services(
    endpoints: Mapping[str, str], core_services: Iterable[str]
) -> List[str]:
    return sorted(set(endpoints) | set(core_services))


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    service_endpoints = providers.Callable(
        build_service_endpoints,
        api_base_url=config.monitoring.api_base_url,
        service_names=config.monitoring.service_names,
        services=config.monitoring.services,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.ge.title,
        description=config.ge.description,
        version=config.ge.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
    )

    # Infrastructure
    metrics_store = providers.Singleton(
        InMemoryMetricsStore,
        capacity=config.monitoring.metrics_capacity,
    )

    deployment_job_repository = providers.Singleton(InMemoryDeploymentJobRepository)

    health_snapshot_repository = providers.Singleton(InMemoryHealthSnapshotRepository)

    health_probe = providers.Singleton(
        SchemeRoutingHealthProbe,
        timeout=config.monitoring.probe_timeout_seconds,
    )

    system_metrics_provider = providers.Singleton(
        PsutilSystemMetricsProvider,
        disk_path=config.monitoring.disk_path,
    )

    api_usage_tracker = providers.Singleton(ApiUsageTracker)

    primary_channel = providers.Singleton(
        build_primary_channel,
        url=config.alerts.primary_webhook_url,
        timeout=config.alerts.webhook_timeout_seconds,
    )

    urgent_channel = providers.Singleton(
        build_urgent_channel,
        url=config.alerts.urgent_webhook_url,
        timeout=config.alerts.webhook_timeout_seconds,
    )

    deployment_runtime = providers.Singleton(
        ShellDeploymentRuntime,
        commands=config.deployment.commands,
        command_timeout=config.deployment.command_timeout_seconds,
        env_file_path=config.deployment.env_file_path,
        version=config.deployment.version,
    )

    service_controller = providers.Singleton(
        ShellServiceController,
        restart_command=config.system.restart_command,
        timeout=config.system.restart_timeout_seconds,
    )

    # Application (long-lived engines)
    alerting_engine = providers.Singleton(
        AlertingEngine,
        thresholds=providers.Callable(build_thresholds, config.alerts),
        primary_channel=primary_channel,
        urgent_channel=urgent_channel,
        subject_prefix=config.alerts.subject_prefix,
    )

    health_monitor = providers.Singleton(
        HealthMonitor,
        probe=health_probe,
        alerting_engine=alerting_engine,
        snapshot_repository=health_snapshot_repository,
        system_metrics_provider=system_metrics_provider,
        service_endpoints=service_endpoints,
        agent_roster=config.monitoring.agents,
        agent_health_url_template=providers.Callable(
            build_agent_health_url_template, config.monitoring.api_base_url
        ),
        probe_timeout=config.monitoring.probe_timeout_seconds,
    )

    metrics_collector = providers.Singleton(
        MetricsCollector,
        metrics_store=metrics_store,
        system_metrics_provider=system_metrics_provider,
        snapshot_repository=health_snapshot_repository,
        job_repository=deployment_job_repository,
        alerting_engine=alerting_engine,
        api_usage_tracker=api_usage_tracker,
    )

    deployment_orchestrator = providers.Singleton(
        DeploymentOrchestrator,
        job_repository=deployment_job_repository,
        runtime=deployment_runtime,
        health_monitor=health_monitor,
        alerting_engine=alerting_engine,
        agent_roster=config.monitoring.agents,
        core_services=config.deployment.core_services,
        required_keys=config.deployment.required_keys,
        estimated_duration=config.deployment.estimated_duration,
    )

    monitoring_scheduler = providers.Singleton(
        MonitoringScheduler,
        health_monitor=health_monitor,
        metrics_collector=metrics_collector,
        intervals=providers.Factory(
            MonitoringIntervals,
            comprehensive_seconds=config.monitoring.comprehensive_interval_seconds,
            quick_seconds=config.monitoring.quick_interval_seconds,
            metrics_seconds=config.monitoring.metrics_interval_seconds,
        ),
        run_on_startup=config.monitoring.run_on_startup,
    )

    # Application (use cases)
    deployment_status_use_case = providers.Factory(
        DeploymentStatusUseCase,
        orchestrator=deployment_orchestrator,
    )

    get_system_health_use_case = providers.Factory(
        GetSystemHealthUseCase,
        snapshot_repository=health_snapshot_repository,
        system_info=system_info,
        agent_roster=config.monitoring.agents,
    )

    get_detailed_health_use_case = providers.Factory(
        GetDetailedHealthUseCase,
        snapshot_repository=health_snapshot_repository,
        metrics_store=metrics_store,
        system_info=system_info,
    )

    get_targets_health_use_case = providers.Factory(
        GetTargetsHealthUseCase,
        snapshot_repository=health_snapshot_repository,
    )

    get_performance_metrics_use_case = providers.Factory(
        GetPerformanceMetricsUseCase,
        metrics_store=metrics_store,
    )

    restart_service_use_case = providers.Factory(
        RestartServiceUseCase,
        service_controller=service_controller,
        known_services=providers.Callable(
            build_restartable_services,
            service_endpoints,
            config.deployment.core_services,
        ),
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: Optional[AppContainer] = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for background resources.

    Starts the monitoring scheduler on the running event loop and stops it
    on exit. Deployments still running at shutdown are logged, not awaited.
    """
    container = get_container()
    scheduler = container.monitoring_scheduler()

    try:
        await scheduler.start()
        logger.info("container.resources.initialized")
        yield container

    finally:
        scheduler.shutdown()

        orchestrator = container.deployment_orchestrator()
        if orchestrator.active_count:
            logger.warning(
                "container.deployments.abandoned", active=orchestrator.active_count
            )

        logger.info("container.resources.shutdown")
