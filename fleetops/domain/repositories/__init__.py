"""
Repositories Package

Storage contracts for deployment jobs, metric samples and health snapshots.
Implementations live in the infrastructure layer.
"""

from .deployment_job_repository import IDeploymentJobRepository
from .health_snapshot_repository import IHealthSnapshotRepository
from .metrics_store import IMetricsStore

__all__ = ["IDeploymentJobRepository", "IHealthSnapshotRepository", "IMetricsStore"]
