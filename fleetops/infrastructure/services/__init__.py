"""Background services of the infrastructure layer."""

from .monitoring_scheduler import (
    COMPREHENSIVE_HEALTH_CHECK,
    METRICS_COLLECTION,
    QUICK_PING_SWEEP,
    MonitoringIntervals,
    MonitoringScheduler,
)

__all__ = [
    "COMPREHENSIVE_HEALTH_CHECK",
    "METRICS_COLLECTION",
    "QUICK_PING_SWEEP",
    "MonitoringIntervals",
    "MonitoringScheduler",
]
