import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from run_ticker.config import settings
from run_ticker.services.fetch_types import RefreshResult
from run_ticker.services.refresh_service import refresh_schedule
from run_ticker.services.status_board import StatusBoard, get_status_board


logger = logging.getLogger(__name__)

JOB_ID = "schedule_refresh"


class TickerScheduler:
    """Scheduler for periodic schedule refreshes"""

    def __init__(
        self,
        refresh: Callable[[], RefreshResult] = refresh_schedule,
        board_factory: Callable[[], StatusBoard] = get_status_board,
    ):
        self.scheduler: AsyncIOScheduler | None = None
        self._refresh = refresh
        self._board_factory = board_factory
        self._interval = settings.refresh_interval

    def _refresh_job(self) -> None:
        """Background job that runs one refresh pass and publishes it"""
        logger.debug("Scheduled schedule refresh triggered")
        try:
            result = self._refresh()
        except Exception as e:
            logger.error(f"Exception in scheduled refresh: {e}", exc_info=True)
            return

        self._board_factory().publish(result)
        self._apply_interval(result.interval)

    def _apply_interval(self, interval: timedelta) -> None:
        """Reschedule the job if the refresh asked for a different interval"""
        if interval == self._interval:
            return

        logger.info(
            "Refresh interval changed: %ss -> %ss",
            self._interval.total_seconds(),
            interval.total_seconds(),
        )
        self._interval = interval
        if self.scheduler and self.scheduler.running:
            self.scheduler.reschedule_job(JOB_ID, trigger=IntervalTrigger(seconds=interval.total_seconds()))

    def start(self) -> None:
        """Start the scheduler with the refresh job, running the first pass immediately"""
        if self.scheduler and self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        self.scheduler = AsyncIOScheduler(timezone='UTC')
        self.scheduler.add_job(
            self._refresh_job,
            trigger=IntervalTrigger(seconds=self._interval.total_seconds()),
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            next_run_time=datetime.now(timezone.utc),
        )

        self.scheduler.start()
        logger.info(
            "Scheduler started. Refresh every %ss",
            self._interval.total_seconds(),
        )

    def shutdown(self) -> None:
        """Shutdown the scheduler"""
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Scheduler stopped")
            self.scheduler = None

    def get_next_run_time(self) -> datetime | None:
        """Get next scheduled refresh time"""
        if not self.scheduler:
            return None
        job = self.scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None


ticker_scheduler = TickerScheduler()
