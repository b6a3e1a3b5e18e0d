"""
Health domain entities.

Probe results for individual targets and the immutable snapshot produced by
one comprehensive health sweep.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from fleetops.domain.entities.alert import Alert


class TargetStatus(str, Enum):
    """Liveness of a single service or agent."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class OverallStatus(str, Enum):
    """Derived status of the whole platform."""

    HEALTHY = "healthy"
    WARNING = "warning"
    DEGRADED = "degraded"
    CRITICAL = "critical"


class TargetKind(str, Enum):
    SERVICE = "service"
    AGENT = "agent"


@dataclass(frozen=True)
class ProbeTarget:
    """Something the probe layer can check."""

    name: str
    kind: TargetKind
    url: str


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of probing one target once."""

    status: TargetStatus
    response_time_ms: Optional[float] = None
    error: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_healthy(self) -> bool:
        return self.status is TargetStatus.HEALTHY

    @classmethod
    def healthy(cls, response_time_ms: Optional[float] = None) -> "ProbeResult":
        return cls(status=TargetStatus.HEALTHY, response_time_ms=response_time_ms)

    @classmethod
    def unhealthy(
        cls, error: str, response_time_ms: Optional[float] = None
    ) -> "ProbeResult":
        return cls(
            status=TargetStatus.UNHEALTHY,
            response_time_ms=response_time_ms,
            error=error,
        )


@dataclass(frozen=True)
class InfrastructureSnapshot:
    """Host resource readings; a field is None when it could not be read."""

    cpu_usage: Optional[float] = None
    memory_usage: Optional[float] = None
    disk_usage: Optional[float] = None
    active_connections: Optional[int] = None
    network_bytes_in: Optional[int] = None
    network_bytes_out: Optional[int] = None
    uptime_seconds: Optional[float] = None

    @property
    def available(self) -> bool:
        return any(
            value is not None
            for value in (self.cpu_usage, self.memory_usage, self.disk_usage)
        )

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {
            "cpu_usage": self.cpu_usage,
            "memory_usage": self.memory_usage,
            "disk_usage": self.disk_usage,
            "active_connections": self.active_connections,
            "network_bytes_in": self.network_bytes_in,
            "network_bytes_out": self.network_bytes_out,
            "uptime_seconds": self.uptime_seconds,
        }


def _freeze(results: Mapping[str, ProbeResult]) -> Mapping[str, ProbeResult]:
    return MappingProxyType(dict(results))


@dataclass(frozen=True)
class HealthObservation:
    """Raw output of a sweep, before alerts and status are derived."""

    services: Mapping[str, ProbeResult]
    agents: Mapping[str, ProbeResult]
    infrastructure: InfrastructureSnapshot
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "services", _freeze(self.services))
        object.__setattr__(self, "agents", _freeze(self.agents))


@dataclass(frozen=True)
class HealthCheckResult:
    """Immutable snapshot of one comprehensive health sweep."""

    timestamp: datetime
    services: Mapping[str, ProbeResult]
    agents: Mapping[str, ProbeResult]
    infrastructure: InfrastructureSnapshot
    overall_status: OverallStatus
    alerts: Tuple[Alert, ...] = ()
    health_score: int = 100

    def __post_init__(self) -> None:
        object.__setattr__(self, "services", _freeze(self.services))
        object.__setattr__(self, "agents", _freeze(self.agents))
        object.__setattr__(self, "alerts", tuple(self.alerts))

    @property
    def unhealthy_services(self) -> Tuple[str, ...]:
        return tuple(name for name, r in self.services.items() if not r.is_healthy)

    @property
    def unhealthy_agents(self) -> Tuple[str, ...]:
        return tuple(name for name, r in self.agents.items() if not r.is_healthy)


@dataclass(frozen=True)
class PingSnapshot:
    """Result of the lightweight ping sweep."""

    services: Mapping[str, ProbeResult]
    agents: Mapping[str, ProbeResult]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "services", _freeze(self.services))
        object.__setattr__(self, "agents", _freeze(self.agents))

    @property
    def reachable(self) -> int:
        return sum(
            1
            for result in (*self.services.values(), *self.agents.values())
            if result.is_healthy
        )

    @property
    def total(self) -> int:
        return len(self.services) + len(self.agents)
