"""In-memory holder for the latest health snapshots."""

import asyncio
from typing import Optional

from fleetops.domain.entities.health import HealthCheckResult, PingSnapshot
from fleetops.domain.repositories.health_snapshot_repository import (
    IHealthSnapshotRepository,
)


class InMemoryHealthSnapshotRepository(IHealthSnapshotRepository):
    """Snapshots are immutable, so swapping the reference under a lock is enough."""

    def __init__(self) -> None:
        self._latest: Optional[HealthCheckResult] = None
        self._latest_ping: Optional[PingSnapshot] = None
        self._lock = asyncio.Lock()

    async def save(self, result: HealthCheckResult) -> None:
        async with self._lock:
            if self._latest is None or result.timestamp >= self._latest.timestamp:
                self._latest = result

    async def latest(self) -> Optional[HealthCheckResult]:
        async with self._lock:
            return self._latest

    async def save_ping(self, snapshot: PingSnapshot) -> None:
        async with self._lock:
            self._latest_ping = snapshot

    async def latest_ping(self) -> Optional[PingSnapshot]:
        async with self._lock:
            return self._latest_ping
