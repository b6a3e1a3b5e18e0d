"""MongoDB ping probe - Infrastructure layer."""

from __future__ import annotations

import asyncio
from time import perf_counter

from pymongo import MongoClient

from fleetops.domain.entities.health import ProbeResult, ProbeTarget
from fleetops.domain.ports.health_probe import IHealthProbe


class MongoHealthProbe(IHealthProbe):
    """Runs the ``ping`` admin command on a short-lived client."""

    def __init__(self, *, timeout: float = 5.0) -> None:
        self._timeout_ms = int(timeout * 1000)

    def _ping(self, url: str) -> None:
        client: MongoClient = MongoClient(
            url,
            serverSelectionTimeoutMS=self._timeout_ms,
            connectTimeoutMS=self._timeout_ms,
        )
        try:
            client.admin.command("ping")
        finally:
            client.close()

    async def check(self, target: ProbeTarget) -> ProbeResult:
        start = perf_counter()
        try:
            await asyncio.to_thread(self._ping, target.url)
        except Exception as exc:
            return ProbeResult.unhealthy(
                f"MongoDB ping failed: {exc}",
                response_time_ms=(perf_counter() - start) * 1000,
            )
        return ProbeResult.healthy(response_time_ms=(perf_counter() - start) * 1000)
