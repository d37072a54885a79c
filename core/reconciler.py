# core/reconciler.py

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from models.routine import DayRecord, Store

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ReconcileResult:
    store: Store
    created: bool

class DayReconciler:
    """
    Гарантирует наличие записи за сегодняшний день.

    Новая запись получает текущий набор рутин; старые записи не
    дополняются и никогда не удаляются. Повторный вызов за тот же день
    ничего не меняет.
    """

    def __init__(self, routines: Optional[Iterable[str]] = None):
        self._routines = list(routines) if routines is not None else None

    def routines_for(self, store: Store):
        return self._routines if self._routines is not None else store.routines

    def ensure_today(self, store: Store, today: str) -> ReconcileResult:
        if store.has_day(today):
            return ReconcileResult(store=store, created=False)

        record = DayRecord.empty(today, self.routines_for(store))
        logger.info(f"📅 New day {today}: created empty record")
        return ReconcileResult(store=store.with_days([*store.days, record]), created=True)
