"""DTOs for the health endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from fleetops.domain.entities.alert import Alert, AlertSeverity, AlertType
from fleetops.domain.entities.health import (
    HealthCheckResult,
    OverallStatus,
    PingSnapshot,
    ProbeResult,
    TargetKind,
    TargetStatus,
)


class ProbeResultDTO(BaseModel):
    """Serializable representation of one probe."""

    status: TargetStatus = Field(description="healthy or unhealthy")
    response_time_ms: Optional[float] = Field(
        default=None, description="Probe latency in milliseconds"
    )
    error: Optional[str] = Field(default=None, description="Failure detail")
    checked_at: datetime = Field(description="Timestamp of the probe")

    @classmethod
    def from_domain(cls, result: ProbeResult) -> "ProbeResultDTO":
        return cls(
            status=result.status,
            response_time_ms=result.response_time_ms,
            error=result.error,
            checked_at=result.checked_at,
        )


class AlertDTO(BaseModel):
    type: AlertType
    severity: AlertSeverity
    subject: str
    message: str
    timestamp: datetime

    @classmethod
    def from_domain(cls, alert: Alert) -> "AlertDTO":
        return cls(
            type=alert.type,
            severity=alert.severity,
            subject=alert.subject,
            message=alert.message,
            timestamp=alert.timestamp,
        )


class HealthCheckResultDTO(BaseModel):
    """A complete comprehensive-check snapshot."""

    timestamp: datetime
    overall_status: OverallStatus
    health_score: int = Field(ge=0, le=100)
    services: Dict[str, ProbeResultDTO] = Field(default_factory=dict)
    agents: Dict[str, ProbeResultDTO] = Field(default_factory=dict)
    infrastructure: Dict[str, Optional[float]] = Field(default_factory=dict)
    alerts: List[AlertDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: HealthCheckResult) -> "HealthCheckResultDTO":
        return cls(
            timestamp=result.timestamp,
            overall_status=result.overall_status,
            health_score=result.health_score,
            services={
                name: ProbeResultDTO.from_domain(r)
                for name, r in result.services.items()
            },
            agents={
                name: ProbeResultDTO.from_domain(r) for name, r in result.agents.items()
            },
            infrastructure=result.infrastructure.as_dict(),
            alerts=[AlertDTO.from_domain(alert) for alert in result.alerts],
        )


class PingSummaryDTO(BaseModel):
    timestamp: datetime
    reachable: int
    total: int
    unreachable: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, ping: PingSnapshot) -> "PingSummaryDTO":
        unreachable = [
            name
            for results in (ping.services, ping.agents)
            for name, result in results.items()
            if not result.is_healthy
        ]
        return cls(
            timestamp=ping.timestamp,
            reachable=ping.reachable,
            total=ping.total,
            unreachable=sorted(unreachable),
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health/system response payload."""

    overall_status: str = Field(
        description="Overall status, or 'initializing' before the first sweep"
    )
    uptime_seconds: float
    last_check: Optional[datetime] = None
    system_version: str
    environment: str
    agents_deployed: int
    services_running: int
    health_score: int = Field(ge=0, le=100)
    active_alerts: int = 0
    last_ping: Optional[PingSummaryDTO] = None

    @classmethod
    def build(
        cls,
        *,
        latest: Optional[HealthCheckResult],
        ping: Optional[PingSnapshot],
        uptime_seconds: float,
        system_version: str,
        environment: str,
        agents_deployed: int,
    ) -> "SystemHealthDTO":
        return cls(
            overall_status=(
                latest.overall_status.value if latest else "initializing"
            ),
            uptime_seconds=uptime_seconds,
            last_check=latest.timestamp if latest else None,
            system_version=system_version,
            environment=environment,
            agents_deployed=agents_deployed,
            services_running=(
                len(latest.services) - len(latest.unhealthy_services) if latest else 0
            ),
            health_score=latest.health_score if latest else 0,
            active_alerts=len(latest.alerts) if latest else 0,
            last_ping=PingSummaryDTO.from_domain(ping) if ping else None,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "overall_status": "warning",
                "uptime_seconds": 3600.5,
                "last_check": "2024-09-09T12:00:00Z",
                "system_version": "1.0.0",
                "environment": "production",
                "agents_deployed": 11,
                "services_running": 7,
                "health_score": 95,
                "active_alerts": 1,
            }
        }
    }


class DetailedHealthDTO(BaseModel):
    """DTO representing the /health/detailed response payload."""

    status: str
    message: Optional[str] = None
    last_check: Optional[HealthCheckResultDTO] = None
    performance_trends: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    system_info: Dict[str, Any] = Field(default_factory=dict)


class TargetsHealthDTO(BaseModel):
    """Per-target status map for services or agents."""

    kind: TargetKind
    last_check: Optional[datetime] = None
    healthy: int = 0
    unhealthy: int = 0
    targets: Dict[str, ProbeResultDTO] = Field(default_factory=dict)

    @classmethod
    def from_results(
        cls,
        kind: TargetKind,
        checked_at: datetime,
        results: Mapping[str, ProbeResult],
    ) -> "TargetsHealthDTO":
        unhealthy = sum(1 for r in results.values() if not r.is_healthy)
        return cls(
            kind=kind,
            last_check=checked_at,
            healthy=len(results) - unhealthy,
            unhealthy=unhealthy,
            targets={
                name: ProbeResultDTO.from_domain(r) for name, r in results.items()
            },
        )
