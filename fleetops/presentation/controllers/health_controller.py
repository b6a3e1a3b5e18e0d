"""Health endpoints backed by the last completed sweep."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, status

from fleetops.application.dtos.health_dto import (
    DetailedHealthDTO,
    SystemHealthDTO,
    TargetsHealthDTO,
)
from fleetops.application.use_cases.health_use_cases import (
    GetDetailedHealthUseCase,
    GetSystemHealthUseCase,
    GetTargetsHealthUseCase,
)
from fleetops.domain.entities.health import TargetKind
from fleetops.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/system", response_model=SystemHealthDTO)
@inject
async def system_health(
    request: Request,
    use_case: GetSystemHealthUseCase = Depends(Provide["get_system_health_use_case"]),
) -> SystemHealthDTO:
    """Summary of the platform health and the last ping sweep."""
    started_at = getattr(request.app.state, "started_at", None)
    try:
        return await use_case.execute(started_at)
    except Exception as exc:
        logger.error("health.system.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health",
        ) from exc


@router.get("/detailed", response_model=DetailedHealthDTO)
@inject
async def detailed_health(
    use_case: GetDetailedHealthUseCase = Depends(
        Provide["get_detailed_health_use_case"]
    ),
) -> DetailedHealthDTO:
    """Full last snapshot with performance trends, or ``initializing``."""
    try:
        return await use_case.execute()
    except Exception as exc:
        logger.error("health.detailed.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve detailed health",
        ) from exc


@router.get("/agents", response_model=TargetsHealthDTO)
@inject
async def agents_health(
    use_case: GetTargetsHealthUseCase = Depends(
        Provide["get_targets_health_use_case"]
    ),
) -> TargetsHealthDTO:
    """Health of every configured agent endpoint from the latest sweep."""
    return await use_case.execute(TargetKind.AGENT)


@router.get("/services", response_model=TargetsHealthDTO)
@inject
async def services_health(
    use_case: GetTargetsHealthUseCase = Depends(
        Provide["get_targets_health_use_case"]
    ),
) -> TargetsHealthDTO:
    """Health of every configured service endpoint from the latest sweep."""
    return await use_case.execute(TargetKind.SERVICE)
