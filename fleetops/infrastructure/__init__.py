"""
Infrastructure Layer Package

Implementations of the domain ports and repositories: health probes,
notification channels, psutil metrics, shell-driven deployment runtime,
in-memory stores and the monitoring scheduler.
"""

from fleetops.infrastructure import (
    metrics,
    notifications,
    probes,
    repositories,
    runtime,
    services,
)

__all__ = [
    "metrics",
    "notifications",
    "probes",
    "repositories",
    "runtime",
    "services",
]
