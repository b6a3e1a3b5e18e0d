"""HTTP health probe - Infrastructure layer."""

from __future__ import annotations

from time import perf_counter

import httpx

from fleetops.domain.entities.health import ProbeResult, ProbeTarget
from fleetops.domain.ports.health_probe import IHealthProbe


class HttpHealthProbe(IHealthProbe):
    """Treats any 2xx/3xx answer from the target URL as healthy."""

    def __init__(self, *, timeout: float = 5.0) -> None:
        self._timeout = timeout

    async def check(self, target: ProbeTarget) -> ProbeResult:
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(target.url)
        except httpx.RequestError as exc:
            return ProbeResult.unhealthy(f"HTTP request failed: {exc}")

        latency_ms = (perf_counter() - start) * 1000
        if response.status_code >= 400:
            return ProbeResult.unhealthy(
                f"Endpoint not responding (HTTP {response.status_code})",
                response_time_ms=latency_ms,
            )
        return ProbeResult.healthy(response_time_ms=latency_ms)
