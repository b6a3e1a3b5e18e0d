"""
Domain Repository Interface - Deployment Job
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from fleetops.domain.entities.deployment import DeploymentJob


class IDeploymentJobRepository(ABC):
    """Interface for deployment job storage."""

    @abstractmethod
    async def create(self, job: DeploymentJob) -> DeploymentJob:
        """Store a new deployment job."""
        pass

    @abstractmethod
    async def get_by_id(self, job_id: str) -> Optional[DeploymentJob]:
        """Get a snapshot of a deployment job by ID."""
        pass

    @abstractmethod
    async def update(self, job: DeploymentJob) -> DeploymentJob:
        """Replace the stored state of a deployment job."""
        pass

    @abstractmethod
    async def list(self, limit: int = 100) -> List[DeploymentJob]:
        """List deployment jobs, newest first."""
        pass
