"""
Monitoring Scheduler - Infrastructure Layer

Runs the periodic monitoring tasks on an APScheduler ``AsyncIOScheduler``
sharing the application event loop:

- comprehensive health sweep (alerts included)
- quick ping sweep
- metrics collection

A run that is still in progress when the next one is due is skipped. With
``run_on_startup`` the sweep and the collection are also due immediately, so
startup does not wait for them.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from fleetops.domain.entities.errors import ScheduledTaskError
from fleetops.shared import get_logger

logger = get_logger(__name__)

COMPREHENSIVE_HEALTH_CHECK = "comprehensive_health_check"
QUICK_PING_SWEEP = "quick_ping_sweep"
METRICS_COLLECTION = "metrics_collection"


@dataclass(frozen=True)
class MonitoringIntervals:
    comprehensive_seconds: float = 300
    quick_seconds: float = 30
    metrics_seconds: float = 60


class MonitoringScheduler:
    """Owns the three periodic monitoring jobs."""

    def __init__(
        self,
        health_monitor: Any,
        metrics_collector: Any,
        intervals: MonitoringIntervals = MonitoringIntervals(),
        run_on_startup: bool = True,
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        self.health_monitor = health_monitor
        self.metrics_collector = metrics_collector
        self.intervals = intervals
        self.run_on_startup = run_on_startup
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self.failures: Dict[str, int] = {
            COMPREHENSIVE_HEALTH_CHECK: 0,
            QUICK_PING_SWEEP: 0,
            METRICS_COLLECTION: 0,
        }
        self.runs: Dict[str, int] = dict.fromkeys(self.failures, 0)

    @property
    def running(self) -> bool:
        return bool(self.scheduler.running)

    async def _guarded(self, task: str, body: Callable[[], Awaitable[Any]]) -> None:
        # One failed run is logged and dropped; the next run is unaffected.
        try:
            await body()
        except Exception as exc:
            self.failures[task] += 1
            error = ScheduledTaskError(task, str(exc))
            logger.error(
                "scheduler.task.error",
                task=error.task,
                error=error.message,
                failures=self.failures[task],
                exc_info=exc,
            )
        else:
            self.runs[task] += 1

    async def comprehensive_health_check(self) -> None:
        await self._guarded(
            COMPREHENSIVE_HEALTH_CHECK, self.health_monitor.run_comprehensive_check
        )

    async def quick_ping_sweep(self) -> None:
        await self._guarded(QUICK_PING_SWEEP, self.health_monitor.run_quick_check)

    async def collect_metrics(self) -> None:
        await self._guarded(METRICS_COLLECTION, self.metrics_collector.collect)

    def _add_job(
        self,
        func: Callable[[], Awaitable[None]],
        job_id: str,
        seconds: float,
        run_now: bool = False,
    ) -> None:
        extra: Dict[str, Any] = {}
        if run_now:
            extra["next_run_time"] = datetime.now(timezone.utc)
        self.scheduler.add_job(
            func,
            trigger=IntervalTrigger(seconds=seconds),
            id=job_id,
            name=job_id.replace("_", " "),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
            **extra,
        )
        logger.info("scheduler.job.added", job_id=job_id, interval_seconds=seconds)

    def setup_jobs(self) -> None:
        self._add_job(
            self.comprehensive_health_check,
            COMPREHENSIVE_HEALTH_CHECK,
            self.intervals.comprehensive_seconds,
            run_now=self.run_on_startup,
        )
        self._add_job(
            self.quick_ping_sweep, QUICK_PING_SWEEP, self.intervals.quick_seconds
        )
        self._add_job(
            self.collect_metrics,
            METRICS_COLLECTION,
            self.intervals.metrics_seconds,
            run_now=self.run_on_startup,
        )

    async def start(self) -> None:
        """Register the jobs and start the scheduler on the running loop."""
        if self.running:
            return
        self.setup_jobs()
        self.scheduler.start()
        logger.info("scheduler.started", jobs=len(self.scheduler.get_jobs()))

    def shutdown(self, wait: bool = False) -> None:
        if not self.running:
            return
        self.scheduler.shutdown(wait=wait)
        logger.info("scheduler.stopped")

    def list_jobs(self) -> List[Dict[str, Any]]:
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append(
                {
                    "id": job.id,
                    "name": job.name,
                    "trigger": str(job.trigger),
                    "next_run": getattr(job, "next_run_time", None),
                }
            )
        return jobs
