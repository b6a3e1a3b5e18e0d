"""
In-memory metrics store - Infrastructure layer.

FIFO retention: once full, each insert evicts the sample with the oldest
timestamp. Samples are never touched on read.
"""

import asyncio
import bisect
from datetime import datetime
from typing import List, Optional

from fleetops.domain.entities.metrics import MetricSample
from fleetops.domain.repositories.metrics_store import IMetricsStore
from fleetops.shared import get_logger

logger = get_logger(__name__)

DEFAULT_CAPACITY = 1000


class InMemoryMetricsStore(IMetricsStore):
    """Bounded store of metric samples kept sorted by timestamp."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("Metrics store capacity must be greater than 0")
        self._capacity = capacity
        self._timestamps: List[datetime] = []
        self._samples: List[MetricSample] = []
        self._lock = asyncio.Lock()
        self.evicted_total = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    async def record(self, sample: MetricSample) -> None:
        async with self._lock:
            if len(self._samples) >= self._capacity:
                if sample.timestamp < self._timestamps[0]:
                    # Older than everything retained: it would be evicted first.
                    self.evicted_total += 1
                    return
                self._timestamps.pop(0)
                self._samples.pop(0)
                self.evicted_total += 1
                logger.debug("metrics_store.evicted", capacity=self._capacity)

            index = bisect.bisect_right(self._timestamps, sample.timestamp)
            self._timestamps.insert(index, sample.timestamp)
            self._samples.insert(index, sample)

    async def query(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[MetricSample]:
        async with self._lock:
            low = 0 if start is None else bisect.bisect_left(self._timestamps, start)
            high = (
                len(self._timestamps)
                if end is None
                else bisect.bisect_right(self._timestamps, end)
            )
            return self._samples[low:high]

    async def count(self) -> int:
        async with self._lock:
            return len(self._samples)
