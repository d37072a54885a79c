# services/tracker_service.py

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Set, Union

from core.database import LocalStore
from core.reconciler import DayReconciler
from core import stats as stats_engine
from models.enums import SyncStatus
from models.routine import DayRecord, Store
from models.stats import DerivedStats
from models.sync import PullResult, SyncResult
from services.sync_client import RemoteSyncClient
from utils.datetime_utils import format_date, today as local_today

logger = logging.getLogger(__name__)

class UnknownRoutineError(ValueError):
    """Рутина не входит в текущий набор"""
    pass

class RoutineTrackerService:
    """
    Сессия трекера: единственный владелец текущего Store.

    Локальные изменения применяются и сохраняются сразу; отправка на
    прокси выполняется в фоне и никогда не блокирует изменения.
    """

    def __init__(self, local_store: LocalStore,
                 sync_client: Optional[RemoteSyncClient] = None,
                 reconciler: Optional[DayReconciler] = None,
                 clock: Optional[Callable[[], date]] = None):
        self.local_store = local_store
        self.sync_client = sync_client
        self.reconciler = reconciler or DayReconciler()
        self.clock = clock or (lambda: local_today(local_store.tz_name))
        self.store: Optional[Store] = None
        self._pending: Set[asyncio.Task] = set()

    # ===== HELPERS =====

    def today(self) -> str:
        return format_date(self.clock())

    def _require_store(self) -> Store:
        if self.store is None:
            return self.start()
        return self.store

    def _commit(self, store: Store) -> Store:
        self.local_store.save(store)
        self.store = store
        return store

    def _reconcile(self, store: Store) -> Store:
        return self.reconciler.ensure_today(store, self.today()).store

    def today_record(self) -> DayRecord:
        store = self._require_store()
        record = store.find_day(self.today())
        if record is None:
            store = self._commit(self._reconcile(store))
            record = store.find_day(self.today())
        return record

    # ===== LIFECYCLE =====

    def start(self) -> Store:
        """Загрузить снимок и гарантировать запись за сегодня"""
        store = self.local_store.load(self.today())
        return self._commit(self._reconcile(store))

    def tick(self) -> bool:
        """Проверка смены дня; True если создана новая запись"""
        store = self._require_store()
        result = self.reconciler.ensure_today(store, self.today())
        if result.created:
            self._commit(result.store)
        return result.created

    # ===== MUTATIONS =====

    def set_check(self, routine: str, value: bool) -> DayRecord:
        """Отметить рутину за сегодня; остальные дни не изменяются"""
        store = self._require_store()
        if routine not in store.routines:
            raise UnknownRoutineError(f"Unknown routine: {routine}")

        current = self.today_record()
        updated = DayRecord(date=current.date, checks={**current.checks, routine: bool(value)})
        self._commit(self.store.with_day(updated))
        self._schedule_push(updated)
        return updated

    def reset_today(self) -> DayRecord:
        store = self._require_store()
        current = self.today_record()
        updated = DayRecord.empty(current.date, store.routines)
        self._commit(self.store.with_day(updated))
        self._schedule_push(updated)
        return updated

    def clear_all(self) -> Store:
        """Удалить всю историю и начать с пустого сегодняшнего дня"""
        logger.warning("🧹 Clearing all tracker history")
        return self._commit(self.local_store.fresh(self.today()))

    def import_file(self, file_path: Union[str, Path]) -> Store:
        """Заменить Store содержимым файла; при ошибке состояние не меняется"""
        store = self._require_store()
        replacement = self.local_store.import_snapshot(store, file_path)
        return self._commit(self._reconcile(replacement))

    def export_file(self, export_dir: Union[str, Path]) -> Path:
        return self.local_store.export_snapshot(self._require_store(), export_dir, self.today())

    # ===== REMOTE =====

    async def pull_remote(self) -> PullResult:
        """Полная замена дней данными прокси, если они есть"""
        if self.sync_client is None:
            return PullResult.failure(RuntimeError("sync client is not configured"))

        result = await self.sync_client.pull_all()
        if result.has_data:
            store = self._require_store().with_days(result.days)
            self._commit(self._reconcile(store))
            logger.info(f"☁️ Local days replaced with {len(result.days)} remote days")
        return result

    async def push_today(self) -> SyncResult:
        record = self.today_record()
        if self.sync_client is None:
            return SyncResult(status=SyncStatus.SKIPPED, date=record.date)
        return await self.sync_client.push_day(record.date, record.checks)

    def _schedule_push(self, record: DayRecord) -> Optional[asyncio.Task]:
        if self.sync_client is None:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running loop, remote save of {record.date} skipped")
            return None

        task = loop.create_task(self.sync_client.push_day(record.date, dict(record.checks)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Дождаться фоновых отправок (перед выходом)"""
        if not self._pending:
            return
        results = await asyncio.gather(*list(self._pending), return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                logger.error(f"❌ Background remote save crashed: {result!r}")

    # ===== STATS =====

    def stats(self, weeks: int = stats_engine.HEATMAP_WEEKS) -> DerivedStats:
        store = self._require_store()
        return stats_engine.summarize(store.days, len(store.routines), self.clock(), weeks)

    def history(self, limit: int = stats_engine.HISTORY_LIMIT):
        store = self._require_store()
        return stats_engine.history(store.days, store.routines, limit)
