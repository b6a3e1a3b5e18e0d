"""
Metrics Router - Presentation Layer

Exposes windows of the rolling metrics store.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from fleetops.application.dtos.metrics_dto import PerformanceMetricsDTO
from fleetops.application.use_cases.metrics_use_cases import (
    DEFAULT_TIMEFRAME,
    GetPerformanceMetricsUseCase,
)
from fleetops.domain.entities.errors import InvalidTimeframeError
from fleetops.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/metrics", tags=["Metrics"])


@router.get("/performance", response_model=PerformanceMetricsDTO)
@inject
async def performance_metrics(
    timeframe: str = Query(
        DEFAULT_TIMEFRAME,
        description="Window to return, e.g. 15m, 1h, 6h, 24h or 7d",
    ),
    use_case: GetPerformanceMetricsUseCase = Depends(
        Provide["get_performance_metrics_use_case"]
    ),
) -> PerformanceMetricsDTO:
    """
    Return samples, summary statistics and trends for the requested window.

    Samples older than the store capacity allows are no longer available, so
    long windows may start later than requested.
    """
    try:
        metrics = await use_case.execute(timeframe)
    except InvalidTimeframeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": e.message, **e.details},
        )

    logger.debug(
        "metrics.performance.retrieved",
        timeframe=timeframe,
        metrics_count=metrics.metrics_count,
    )
    return metrics
