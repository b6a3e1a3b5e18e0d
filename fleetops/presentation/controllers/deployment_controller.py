"""
Deployment Router - Presentation Layer

Starts rollouts in the background and exposes their step logs.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from fleetops.application.dtos.deployment_dto import (
    DeploymentJobDTO,
    DeploymentJobSummaryDTO,
    DeploymentRequestDTO,
    StartDeploymentResponseDTO,
)
from fleetops.application.use_cases.deployment_use_case import DeploymentStatusUseCase
from fleetops.domain.entities.deployment import FULL_SYSTEM_SCOPE
from fleetops.domain.entities.errors import (
    DeploymentNotFoundError,
    UnknownDeploymentScopeError,
)
from fleetops.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/deploy", tags=["Deployments"])


async def _start(
    scope: str,
    request: Optional[DeploymentRequestDTO],
    use_case: DeploymentStatusUseCase,
) -> StartDeploymentResponseDTO:
    request = request or DeploymentRequestDTO()
    try:
        response = await use_case.start(scope, request.environment, request.config)
    except UnknownDeploymentScopeError as e:
        logger.warning("deployment.scope.unknown", scope=scope)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": e.message, **e.details},
        )
    except Exception as e:
        logger.error("deployment.start.failed", scope=scope, error=str(e), exc_info=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to start deployment: {str(e)}",
        )

    logger.info(
        "deployment.accepted",
        deployment_id=response.deployment_id,
        scope=response.scope,
        environment=request.environment,
    )
    return response


@router.get("/status", response_model=DeploymentJobDTO)
@inject
async def get_deployment_status(
    deployment_id: str = Query(..., alias="id", description="Deployment identifier"),
    use_case: DeploymentStatusUseCase = Depends(Provide["deployment_status_use_case"]),
) -> DeploymentJobDTO:
    """Return the status and step log of one deployment."""
    try:
        return await use_case.get(deployment_id)
    except DeploymentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/jobs", response_model=List[DeploymentJobSummaryDTO])
@inject
async def list_deployments(
    limit: int = Query(100, ge=1, le=1000, description="Maximum jobs to return"),
    use_case: DeploymentStatusUseCase = Depends(Provide["deployment_status_use_case"]),
) -> List[DeploymentJobSummaryDTO]:
    """List known deployment jobs, newest first."""
    return await use_case.list(limit=limit)


@router.post(
    "/full-system",
    response_model=StartDeploymentResponseDTO,
    status_code=status.HTTP_202_ACCEPTED,
)
@inject
async def deploy_full_system(
    request: Optional[DeploymentRequestDTO] = None,
    use_case: DeploymentStatusUseCase = Depends(Provide["deployment_status_use_case"]),
) -> StartDeploymentResponseDTO:
    """
    Start a full-system rollout.

    The pipeline runs in the background; poll the returned ``tracking_url``
    for progress.
    """
    return await _start(FULL_SYSTEM_SCOPE, request, use_case)


@router.post(
    "/agent/{agent_id}",
    response_model=StartDeploymentResponseDTO,
    status_code=status.HTTP_202_ACCEPTED,
)
@inject
async def deploy_agent(
    agent_id: str,
    request: Optional[DeploymentRequestDTO] = None,
    use_case: DeploymentStatusUseCase = Depends(Provide["deployment_status_use_case"]),
) -> StartDeploymentResponseDTO:
    """Start the rollout of a single agent from the roster."""
    return await _start(agent_id, request, use_case)


@router.post(
    "/{scope}",
    response_model=StartDeploymentResponseDTO,
    status_code=status.HTTP_202_ACCEPTED,
)
@inject
async def deploy_scope(
    scope: str,
    request: Optional[DeploymentRequestDTO] = None,
    use_case: DeploymentStatusUseCase = Depends(Provide["deployment_status_use_case"]),
) -> StartDeploymentResponseDTO:
    """Start a rollout for ``full-system`` or any agent id of the roster."""
    return await _start(scope, request, use_case)
