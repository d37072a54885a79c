# services/scheduler.py

import logging
from typing import Any, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

DAY_CHECK_JOB_ID = "day_rollover_check"

class DayRolloverScheduler:
    """Периодически вызывает проверку смены дня"""

    def __init__(self, tick: Callable[[], Any], interval_seconds: int = 60,
                 scheduler: Optional[AsyncIOScheduler] = None):
        self.tick = tick
        self.interval_seconds = interval_seconds
        self.scheduler = scheduler or AsyncIOScheduler()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    async def _run_tick(self):
        # Корутина выполняется в event loop, а не в пуле потоков исполнителя
        try:
            self.tick()
        except Exception as e:
            # Исключение в задаче не должно остановить планировщик
            logger.error(f"❌ Day rollover check failed: {e}")

    def start(self) -> None:
        """Запуск; требует работающего event loop"""
        self.scheduler.add_job(
            self._run_tick,
            IntervalTrigger(seconds=self.interval_seconds),
            id=DAY_CHECK_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True
        )
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info(f"⏰ Day rollover check every {self.interval_seconds}s")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("⏹️ Day rollover scheduler stopped")
