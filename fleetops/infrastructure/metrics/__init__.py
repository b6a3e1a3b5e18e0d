"""Metric sources."""

from .api_usage_tracker import ApiUsageTracker
from .psutil_metrics_provider import PsutilSystemMetricsProvider

__all__ = ["ApiUsageTracker", "PsutilSystemMetricsProvider"]
