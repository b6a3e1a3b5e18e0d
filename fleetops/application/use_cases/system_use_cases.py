"""Use cases for system management."""

from datetime import datetime, timezone
from typing import Iterable

from fleetops.application.dtos.system_dto import RestartResponseDTO
from fleetops.domain.entities.errors import UnknownServiceError
from fleetops.domain.ports.service_control import IServiceController
from fleetops.shared import get_logger

logger = get_logger(__name__)


class RestartServiceUseCase:
    """Delegates restarts of known services to the process controller."""

    def __init__(
        self, service_controller: IServiceController, known_services: Iterable[str]
    ) -> None:
        self._service_controller = service_controller
        self._known_services = frozenset(known_services)

    async def execute(self, service: str, force: bool = False) -> RestartResponseDTO:
        if service not in self._known_services:
            raise UnknownServiceError(
                service, details={"known_services": sorted(self._known_services)}
            )

        logger.info("system.restart.requested", service=service, force=force)
        try:
            result = await self._service_controller.restart(service, force=force)
        except Exception as exc:
            logger.error("system.restart.failed", service=service, error=str(exc))
            return RestartResponseDTO(
                success=False,
                service=service,
                message=f"Service {service} restart failed",
                error=str(exc),
                timestamp=datetime.now(timezone.utc),
            )

        return RestartResponseDTO(
            success=True,
            service=service,
            message=f"Service {service} restarted successfully",
            restart_result=result,
            timestamp=datetime.now(timezone.utc),
        )
