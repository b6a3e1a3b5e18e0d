"""Domain port for host resource readings."""

from __future__ import annotations

from typing import Protocol

from fleetops.domain.entities.health import InfrastructureSnapshot


class ISystemMetricsProvider(Protocol):
    """Supplies CPU, memory, disk and connection readings."""

    async def collect(self) -> InfrastructureSnapshot:
        """Read the current infrastructure snapshot."""
        ...
