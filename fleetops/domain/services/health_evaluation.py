"""Domain service helpers for classifying a health sweep."""

from typing import Iterable, Mapping, Sequence

from fleetops.domain.entities.alert import Alert
from fleetops.domain.entities.health import (
    HealthCheckResult,
    HealthObservation,
    OverallStatus,
    ProbeResult,
)

CRITICAL_UNHEALTHY_SERVICES = 2
DEGRADED_UNHEALTHY_AGENTS = 3

SERVICE_PENALTY = 10
AGENT_PENALTY = 5
CRITICAL_ALERT_PENALTY = 15


def count_unhealthy(results: Mapping[str, ProbeResult]) -> int:
    return sum(1 for result in results.values() if not result.is_healthy)


def count_critical(alerts: Iterable[Alert]) -> int:
    return sum(1 for alert in alerts if alert.is_critical)


def derive_overall_status(
    services: Mapping[str, ProbeResult],
    agents: Mapping[str, ProbeResult],
    alerts: Sequence[Alert],
) -> OverallStatus:
    """Classify the platform; the first matching rule wins."""

    unhealthy_services = count_unhealthy(services)
    unhealthy_agents = count_unhealthy(agents)

    if count_critical(alerts) > 0 or unhealthy_services > CRITICAL_UNHEALTHY_SERVICES:
        return OverallStatus.CRITICAL
    if unhealthy_services > 0 or unhealthy_agents > DEGRADED_UNHEALTHY_AGENTS:
        return OverallStatus.DEGRADED
    if unhealthy_agents > 0:
        return OverallStatus.WARNING
    return OverallStatus.HEALTHY


def calculate_health_score(
    services: Mapping[str, ProbeResult],
    agents: Mapping[str, ProbeResult],
    alerts: Sequence[Alert],
) -> int:
    """Score from 0 to 100 for dashboards. Not used for control decisions."""

    score = 100
    score -= count_unhealthy(services) * SERVICE_PENALTY
    score -= count_unhealthy(agents) * AGENT_PENALTY
    score -= count_critical(alerts) * CRITICAL_ALERT_PENALTY
    return max(0, score)


def build_health_check_result(
    observation: HealthObservation, alerts: Sequence[Alert]
) -> HealthCheckResult:
    return HealthCheckResult(
        timestamp=observation.timestamp,
        services=observation.services,
        agents=observation.agents,
        infrastructure=observation.infrastructure,
        overall_status=derive_overall_status(
            observation.services, observation.agents, alerts
        ),
        alerts=tuple(alerts),
        health_score=calculate_health_score(
            observation.services, observation.agents, alerts
        ),
    )
