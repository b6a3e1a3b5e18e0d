"""Domain port for probing a single service or agent."""

from __future__ import annotations

from typing import Protocol

from fleetops.domain.entities.health import ProbeResult, ProbeTarget


class IHealthProbe(Protocol):
    """Checks liveness and latency of one target."""

    async def check(self, target: ProbeTarget) -> ProbeResult:
        """Probe the target once.

        Implementations report transport failures as an unhealthy result.
        The caller bounds the wait with its own timeout.
        """
        ...
