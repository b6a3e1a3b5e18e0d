"""Redis ping probe - Infrastructure layer."""

from __future__ import annotations

from time import perf_counter

import redis.asyncio as aioredis

from fleetops.domain.entities.health import ProbeResult, ProbeTarget
from fleetops.domain.ports.health_probe import IHealthProbe


class RedisHealthProbe(IHealthProbe):
    def __init__(self, *, socket_timeout: float = 5.0) -> None:
        self._socket_timeout = socket_timeout

    async def check(self, target: ProbeTarget) -> ProbeResult:
        start = perf_counter()
        client = aioredis.from_url(
            target.url,
            socket_connect_timeout=self._socket_timeout,
            socket_timeout=self._socket_timeout,
        )
        try:
            await client.ping()
            return ProbeResult.healthy(response_time_ms=(perf_counter() - start) * 1000)
        except Exception as exc:
            return ProbeResult.unhealthy(
                f"Redis ping failed: {exc}",
                response_time_ms=(perf_counter() - start) * 1000,
            )
        finally:
            await client.aclose()
