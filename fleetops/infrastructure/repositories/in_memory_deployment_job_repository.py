"""
In-memory deployment job repository - Infrastructure layer.

Stores detached snapshots so readers never see a job mid-mutation.
"""

import asyncio
from typing import Dict, List, Optional

from fleetops.domain.entities.deployment import DeploymentJob
from fleetops.domain.repositories.deployment_job_repository import (
    IDeploymentJobRepository,
)


class InMemoryDeploymentJobRepository(IDeploymentJobRepository):
    """Process-local deployment job storage."""

    def __init__(self) -> None:
        self._jobs: Dict[str, DeploymentJob] = {}
        self._lock = asyncio.Lock()

    async def create(self, job: DeploymentJob) -> DeploymentJob:
        async with self._lock:
            if job.id in self._jobs:
                raise ValueError(f"Deployment {job.id} already exists")
            self._jobs[job.id] = job.snapshot()
        return job

    async def get_by_id(self, job_id: str) -> Optional[DeploymentJob]:
        async with self._lock:
            stored = self._jobs.get(job_id)
            return stored.snapshot() if stored else None

    async def update(self, job: DeploymentJob) -> DeploymentJob:
        async with self._lock:
            if job.id not in self._jobs:
                raise KeyError(f"Deployment {job.id} not found")
            self._jobs[job.id] = job.snapshot()
        return job

    async def list(self, limit: int = 100) -> List[DeploymentJob]:
        async with self._lock:
            jobs = sorted(
                self._jobs.values(), key=lambda job: job.started_at, reverse=True
            )
            return [job.snapshot() for job in jobs[:limit]]
