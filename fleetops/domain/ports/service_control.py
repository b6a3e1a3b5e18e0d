"""Domain port for process control of managed services."""

from __future__ import annotations

from typing import Any, Dict, Protocol


class IServiceController(Protocol):
    """Restarts a named service."""

    async def restart(self, service: str, force: bool = False) -> Dict[str, Any]:
        """Restart the service and return details about the operation.

        Raises:
            Exception: If the restart could not be performed.
        """
        ...
