"""Cron-style runner that fires the daily digest."""
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from .digest import DigestService
from ..timeutil import LOCAL_TZ

logger = logger.bind(module="scheduler.runner")

JOB_ID = "deployment-notification"


class DigestScheduler:
    """Runs DigestService.send_daily_digest once a day at hour:minute UTC+7.

    start() is idempotent; must be called from within a running event loop.
    """

    def __init__(self, digest: DigestService, hour: int = 8, minute: int = 0):
        self.digest = digest
        self.hour = hour
        self.minute = minute
        self._scheduler: AsyncIOScheduler | None = None
        self._initialized = False

    @property
    def is_running(self) -> bool:
        return self._initialized

    def start(self) -> None:
        """Register the daily job and start the scheduler."""
        if self._initialized:
            return
        self._initialized = True

        logger.info("Initializing Deployment Window Scheduler...")

        self._scheduler = AsyncIOScheduler(timezone=LOCAL_TZ)
        self._scheduler.add_job(
            self._run,
            trigger=CronTrigger(hour=self.hour, minute=self.minute, timezone=LOCAL_TZ),
            id=JOB_ID,
            name=JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self._scheduler.start()

        logger.info(
            f"Deployment Scheduler configured to trigger daily at "
            f"{self.hour:02d}:{self.minute:02d} (UTC+7)."
        )

    def shutdown(self) -> None:
        """Stop the scheduler without waiting for a running digest."""
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
        self._initialized = False

    def next_run_time(self) -> datetime | None:
        """Next scheduled digest time, or None if not running."""
        if self._scheduler is None:
            return None
        job = self._scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None

    async def _run(self) -> None:
        logger.info("[Scheduler] Triggering daily deployment digest...")
        result = await self.digest.send_daily_digest()
        if not result.success:
            logger.warning(f"[Scheduler] Daily digest failed: {result.error}")
