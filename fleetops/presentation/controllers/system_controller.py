"""System management endpoints."""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from fleetops.application.dtos.system_dto import RestartRequestDTO, RestartResponseDTO
from fleetops.application.use_cases.system_use_cases import RestartServiceUseCase
from fleetops.domain.entities.errors import UnknownServiceError
from fleetops.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/system", tags=["System"])


@router.post("/restart/{service}", response_model=RestartResponseDTO)
@inject
async def restart_service(
    service: str,
    request: Optional[RestartRequestDTO] = None,
    use_case: RestartServiceUseCase = Depends(Provide["restart_service_use_case"]),
) -> RestartResponseDTO:
    """Restart one of the monitored services."""
    force = request.force if request else False
    try:
        result = await use_case.execute(service, force=force)
    except UnknownServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": e.message, **e.details},
        )

    if not result.success:
        logger.warning(
            "system.restart.unsuccessful", service=service, error=result.error
        )
    return result
