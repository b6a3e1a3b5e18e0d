"""Alert value objects and threshold configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class AlertType(str, Enum):
    SERVICE_DOWN = "service_down"
    AGENT_DOWN = "agent_down"
    PERFORMANCE_DEGRADATION = "performance_degradation"
    RESOURCE_CRITICAL = "resource_critical"


class AlertSeverity(str, Enum):
    HIGH = "high"
    CRITICAL = "critical"


class ThresholdResource(str, Enum):
    """Resources that carry warning/critical bounds."""

    RESPONSE_TIME = "response_time"
    ERROR_RATE = "error_rate"
    CPU_USAGE = "cpu_usage"
    MEMORY_USAGE = "memory_usage"
    DISK_USAGE = "disk_usage"


@dataclass(frozen=True)
class AlertThreshold:
    """
    Warning and critical bounds for one resource.

    Only the critical bound raises alerts today; the warning bound is carried
    as configuration for softer signalling.
    """

    resource: ThresholdResource
    warning: float
    critical: float

    def __post_init__(self) -> None:
        if self.warning > self.critical:
            raise ValueError(
                f"Warning bound for {self.resource.value} exceeds its critical bound"
            )

    def exceeds_critical(self, value: Optional[float]) -> bool:
        return value is not None and value > self.critical

    def exceeds_warning(self, value: Optional[float]) -> bool:
        return value is not None and value > self.warning


@dataclass(frozen=True)
class Alert:
    """A classified condition raised by one health sweep."""

    type: AlertType
    severity: AlertSeverity
    subject: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_critical(self) -> bool:
        return self.severity is AlertSeverity.CRITICAL
