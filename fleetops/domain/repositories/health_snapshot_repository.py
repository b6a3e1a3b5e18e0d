"""
Domain Repository Interface - Health Snapshots
"""

from abc import ABC, abstractmethod
from typing import Optional

from fleetops.domain.entities.health import HealthCheckResult, PingSnapshot


class IHealthSnapshotRepository(ABC):
    """Holds the latest externally visible health state."""

    @abstractmethod
    async def save(self, result: HealthCheckResult) -> None:
        """Replace the latest comprehensive check result."""
        pass

    @abstractmethod
    async def latest(self) -> Optional[HealthCheckResult]:
        """Latest comprehensive check result, if any sweep has completed."""
        pass

    @abstractmethod
    async def save_ping(self, snapshot: PingSnapshot) -> None:
        """Replace the latest ping sweep result."""
        pass

    @abstractmethod
    async def latest_ping(self) -> Optional[PingSnapshot]:
        """Latest ping sweep result, if any."""
        pass
