"""
Host metrics provider - Infrastructure layer.

Reads CPU, memory, disk, network and connection counts through psutil.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import psutil

from fleetops.domain.entities.health import InfrastructureSnapshot
from fleetops.domain.ports.system_metrics import ISystemMetricsProvider
from fleetops.shared import get_logger

logger = get_logger(__name__)


class PsutilSystemMetricsProvider(ISystemMetricsProvider):
    def __init__(
        self,
        *,
        disk_path: str = "/",
        started_at: Optional[datetime] = None,
        cpu_interval: float = 0.1,
    ) -> None:
        self._disk_path = disk_path
        self._started_at = started_at or datetime.now(timezone.utc)
        self._cpu_interval = cpu_interval

    def _read(self) -> InfrastructureSnapshot:
        network = psutil.net_io_counters()
        try:
            connections: Optional[int] = len(psutil.net_connections(kind="inet"))
        except (psutil.AccessDenied, OSError):
            # Needs elevated privileges on some platforms.
            connections = None

        return InfrastructureSnapshot(
            cpu_usage=psutil.cpu_percent(interval=self._cpu_interval),
            memory_usage=psutil.virtual_memory().percent,
            disk_usage=psutil.disk_usage(self._disk_path).percent,
            active_connections=connections,
            network_bytes_in=network.bytes_recv if network else None,
            network_bytes_out=network.bytes_sent if network else None,
            uptime_seconds=(
                datetime.now(timezone.utc) - self._started_at
            ).total_seconds(),
        )

    async def collect(self) -> InfrastructureSnapshot:
        return await asyncio.to_thread(self._read)
