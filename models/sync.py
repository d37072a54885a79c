# models/sync.py

from dataclasses import dataclass, field
from typing import List, Optional

from models.enums import PullStatus, SyncStatus
from models.routine import DayRecord

@dataclass
class SyncResult:
    """Результат отправки одного дня на прокси"""
    status: SyncStatus
    date: Optional[str] = None
    page_id: Optional[str] = None
    created: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == SyncStatus.SAVED

    @classmethod
    def failure(cls, error: Exception, date: Optional[str] = None) -> "SyncResult":
        return cls(status=SyncStatus.FAILED, date=date, error=str(error) or type(error).__name__)

@dataclass
class PullResult:
    """Результат загрузки всех дней с прокси"""
    status: PullStatus
    days: List[DayRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def has_data(self) -> bool:
        # Пустой успешный ответ и ошибка одинаково не заменяют локальные данные
        return self.status == PullStatus.OK and bool(self.days)

    @classmethod
    def failure(cls, error: Exception) -> "PullResult":
        return cls(status=PullStatus.FAILED, error=str(error) or type(error).__name__)
