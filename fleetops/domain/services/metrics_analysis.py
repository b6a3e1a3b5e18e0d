"""Read-side aggregations over a window of metric samples."""

import re
from datetime import timedelta
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from fleetops.domain.entities.errors import InvalidTimeframeError
from fleetops.domain.entities.metrics import MetricSample

_TIMEFRAME_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd])\s*$", re.IGNORECASE)
_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}

# Relative change below this fraction is reported as stable.
STABLE_TOLERANCE = 0.05

TRACKED_READINGS: Tuple[Tuple[str, str], ...] = (
    ("system", "cpu_usage"),
    ("system", "memory_usage"),
    ("system", "disk_usage"),
    ("system", "active_connections"),
    ("agents", "average_response_time_ms"),
    ("agents", "unhealthy_agents"),
    ("api", "error_rate"),
    ("api", "average_latency_ms"),
)


def parse_timeframe(timeframe: str) -> timedelta:
    """Parse '15m', '1h', '7d' style windows."""
    match = _TIMEFRAME_PATTERN.match(timeframe or "")
    if not match:
        raise InvalidTimeframeError(timeframe)
    amount = int(match.group(1))
    if amount <= 0:
        raise InvalidTimeframeError(timeframe)
    return timedelta(**{_UNITS[match.group(2).lower()]: amount})


def _series(samples: Sequence[MetricSample], group: str, name: str) -> np.ndarray:
    values = [sample.reading(group, name) for sample in samples]
    return np.array([v for v in values if v is not None], dtype=float)


def summarize_metrics(samples: Sequence[MetricSample]) -> Dict[str, Any]:
    """Average, min, max and p95 of each tracked reading."""

    summary: Dict[str, Any] = {"sample_count": len(samples)}
    if not samples:
        return summary

    summary["window_start"] = samples[0].timestamp
    summary["window_end"] = samples[-1].timestamp

    for group, name in TRACKED_READINGS:
        series = _series(samples, group, name)
        if series.size == 0:
            continue
        summary[f"{group}.{name}"] = {
            "average": round(float(np.mean(series)), 3),
            "min": round(float(np.min(series)), 3),
            "max": round(float(np.max(series)), 3),
            "p95": round(float(np.percentile(series, 95)), 3),
        }
    return summary


def _direction(first: float, last: float) -> str:
    baseline = abs(first) if first else 1.0
    change = (last - first) / baseline
    if abs(change) < STABLE_TOLERANCE:
        return "stable"
    return "increasing" if change > 0 else "decreasing"


def calculate_trends(samples: Sequence[MetricSample]) -> Dict[str, Dict[str, Any]]:
    """Delta and direction of each tracked reading across the window."""

    trends: Dict[str, Dict[str, Any]] = {}
    if len(samples) < 2:
        return trends

    for group, name in TRACKED_READINGS:
        series = _series(samples, group, name)
        if series.size < 2:
            continue
        first, last = float(series[0]), float(series[-1])
        slope: Optional[float] = None
        if np.ptp(series) > 0:
            slope = float(np.polyfit(np.arange(series.size), series, 1)[0])
        trends[f"{group}.{name}"] = {
            "first": round(first, 3),
            "last": round(last, 3),
            "delta": round(last - first, 3),
            "slope_per_sample": round(slope, 4) if slope is not None else 0.0,
            "direction": _direction(first, last),
        }
    return trends

