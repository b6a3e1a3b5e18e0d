"""
Domain Repository Interface - Metrics Store
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from fleetops.domain.entities.metrics import MetricSample


class IMetricsStore(ABC):
    """Bounded, time-ordered retention of metric samples."""

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Maximum number of retained samples."""
        pass

    @abstractmethod
    async def record(self, sample: MetricSample) -> None:
        """Insert a sample, evicting the oldest one when full."""
        pass

    @abstractmethod
    async def query(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[MetricSample]:
        """Samples with start <= timestamp <= end, oldest first."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of retained samples."""
        pass
