"""Probe that picks an implementation from the target URL scheme."""

from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import urlsplit

from fleetops.domain.entities.health import ProbeResult, ProbeTarget
from fleetops.domain.ports.health_probe import IHealthProbe

from .http_probe import HttpHealthProbe
from .mongo_probe import MongoHealthProbe
from .redis_probe import RedisHealthProbe


class SchemeRoutingHealthProbe(IHealthProbe):
    """http(s) -> HTTP GET, redis(s) -> PING, mongodb(+srv) -> admin ping."""

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        probes: Optional[Dict[str, IHealthProbe]] = None,
    ) -> None:
        if probes is None:
            http = HttpHealthProbe(timeout=timeout)
            redis = RedisHealthProbe(socket_timeout=timeout)
            mongo = MongoHealthProbe(timeout=timeout)
            probes = {
                "http": http,
                "https": http,
                "redis": redis,
                "rediss": redis,
                "mongodb": mongo,
                "mongodb+srv": mongo,
            }
        self._probes = probes

    async def check(self, target: ProbeTarget) -> ProbeResult:
        if not target.url:
            return ProbeResult.unhealthy("Probe URL not configured.")

        scheme = urlsplit(target.url).scheme.lower()
        probe = self._probes.get(scheme)
        if probe is None:
            return ProbeResult.unhealthy(f"Unsupported probe scheme: '{scheme}'")
        return await probe.check(target)
