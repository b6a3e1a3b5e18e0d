from datetime import datetime, timezone

from fleetops.application.dtos.health_dto import (
    PingSummaryDTO,
    SystemHealthDTO,
    TargetsHealthDTO,
)
from fleetops.domain.entities.alert import Alert, AlertSeverity, AlertType
from fleetops.domain.entities.health import (
    HealthCheckResult,
    InfrastructureSnapshot,
    OverallStatus,
    PingSnapshot,
    ProbeResult,
    TargetKind,
)

NOW = datetime(2024, 9, 9, 12, 0, tzinfo=timezone.utc)


def _result() -> HealthCheckResult:
    return HealthCheckResult(
        timestamp=NOW,
        services={
            "database": ProbeResult.healthy(5.0),
            "voice_engine": ProbeResult.unhealthy("HTTP 503"),
        },
        agents={"lexi-pro": ProbeResult.healthy(40.0)},
        infrastructure=InfrastructureSnapshot(cpu_usage=10.0),
        overall_status=OverallStatus.CRITICAL,
        alerts=(
            Alert(
                type=AlertType.SERVICE_DOWN,
                severity=AlertSeverity.CRITICAL,
                subject="voice_engine",
                message="Service voice_engine is unhealthy: HTTP 503",
                timestamp=NOW,
            ),
        ),
        health_score=80,
    )


def test_system_health_before_first_sweep():
    dto = SystemHealthDTO.build(
        latest=None,
        ping=None,
        uptime_seconds=1.5,
        system_version="1.0.0",
        environment="test",
        agents_deployed=5,
    )

    assert dto.overall_status == "initializing"
    assert dto.last_check is None
    assert dto.services_running == 0
    assert dto.health_score == 0
    assert dto.last_ping is None


def test_system_health_from_snapshot():
    ping = PingSnapshot(
        services={"database": ProbeResult.healthy()},
        agents={"lexi-pro": ProbeResult.unhealthy("timeout")},
        timestamp=NOW,
    )

    dto = SystemHealthDTO.build(
        latest=_result(),
        ping=ping,
        uptime_seconds=60.0,
        system_version="1.0.0",
        environment="production",
        agents_deployed=5,
    )

    assert dto.overall_status == "critical"
    assert dto.last_check == NOW
    assert dto.services_running == 1
    assert dto.health_score == 80
    assert dto.active_alerts == 1
    assert dto.last_ping.reachable == 1
    assert dto.last_ping.total == 2


def test_ping_summary_lists_unreachable_targets_sorted():
    ping = PingSnapshot(
        services={"redis": ProbeResult.unhealthy("refused")},
        agents={
            "paymaster": ProbeResult.unhealthy("timeout"),
            "edu-kids": ProbeResult.healthy(),
        },
    )

    summary = PingSummaryDTO.from_domain(ping)

    assert summary.unreachable == ["paymaster", "redis"]


def test_targets_health_counts():
    result = _result()

    dto = TargetsHealthDTO.from_results(TargetKind.SERVICE, NOW, result.services)

    assert dto.healthy == 1
    assert dto.unhealthy == 1
    assert dto.targets["voice_engine"].error == "HTTP 503"
