"""In-memory repository implementations."""

from .in_memory_deployment_job_repository import InMemoryDeploymentJobRepository
from .in_memory_health_snapshot_repository import InMemoryHealthSnapshotRepository
from .in_memory_metrics_store import InMemoryMetricsStore

__all__ = [
    "InMemoryDeploymentJobRepository",
    "InMemoryHealthSnapshotRepository",
    "InMemoryMetricsStore",
]
