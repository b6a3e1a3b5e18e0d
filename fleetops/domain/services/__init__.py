"""Pure domain services: health classification and metrics aggregation."""

from .health_evaluation import (
    build_health_check_result,
    calculate_health_score,
    derive_overall_status,
)
from .metrics_analysis import calculate_trends, parse_timeframe, summarize_metrics

__all__ = [
    "build_health_check_result",
    "calculate_health_score",
    "derive_overall_status",
    "calculate_trends",
    "parse_timeframe",
    "summarize_metrics",
]
