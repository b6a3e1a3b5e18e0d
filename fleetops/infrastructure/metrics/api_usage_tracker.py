"""Counters for requests served by the operations API."""

from __future__ import annotations

import threading
from typing import Dict


class ApiUsageTracker:
    """Cumulative request, error and latency counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total = 0
        self._failed = 0
        self._latency_ms_total = 0.0

    def record(self, status_code: int, duration_ms: float) -> None:
        with self._lock:
            self._total += 1
            if status_code >= 500:
                self._failed += 1
            self._latency_ms_total += duration_ms

    def snapshot(self) -> Dict[str, float]:
        with self._lock:
            total = self._total
            return {
                "total_requests": total,
                "failed_requests": self._failed,
                "error_rate": (self._failed / total) if total else 0.0,
                "average_latency_ms": (
                    (self._latency_ms_total / total) if total else 0.0
                ),
            }
