# models/routine.py

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, List, Optional

from utils.validators import is_valid_date

STORE_VERSION = 1

@dataclass
class DayRecord:
    """Отметки рутин за один календарный день"""
    date: str  # YYYY-MM-DD, локальное время
    checks: Dict[str, bool] = field(default_factory=dict)

    @property
    def completed(self) -> int:
        return sum(1 for value in self.checks.values() if value)

    def is_checked(self, routine: str) -> bool:
        # Рутины, добавленные после создания записи, считаются невыполненными
        return bool(self.checks.get(routine, False))

    def to_dict(self) -> dict:
        return {"date": self.date, "checks": dict(self.checks)}

    @classmethod
    def empty(cls, date: str, routines: Iterable[str]) -> "DayRecord":
        return cls(date=date, checks={routine: False for routine in routines})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DayRecord":
        if not isinstance(data, dict):
            raise ValueError(f"Day record must be an object, got {type(data).__name__}")
        date = data.get("date")
        if not is_valid_date(date):
            raise ValueError(f"Invalid day record date: {date!r}")
        checks = data.get("checks") or {}
        if not isinstance(checks, dict):
            raise ValueError(f"Invalid checks for {date}")
        return cls(date=date, checks={str(k): bool(v) for k, v in checks.items()})

def unique_by_date(days: Iterable[DayRecord]) -> List[DayRecord]:
    """Одна запись на дату: побеждает последняя, позиция - первой"""
    positions: Dict[str, int] = {}
    result: List[DayRecord] = []
    for day in days:
        if day.date in positions:
            result[positions[day.date]] = day
        else:
            positions[day.date] = len(result)
            result.append(day)
    return result

@dataclass
class Store:
    """Полное состояние трекера: набор рутин, записи по дням, версия схемы"""
    routines: List[str]
    days: List[DayRecord] = field(default_factory=list)
    version: int = STORE_VERSION

    def __post_init__(self):
        self.days = unique_by_date(self.days)

    def find_day(self, date: str) -> Optional[DayRecord]:
        for day in self.days:
            if day.date == date:
                return day
        return None

    def has_day(self, date: str) -> bool:
        return self.find_day(date) is not None

    def with_days(self, days: Iterable[DayRecord]) -> "Store":
        return replace(self, routines=list(self.routines), days=list(days))

    def with_day(self, record: DayRecord) -> "Store":
        """Копия хранилища, где запись за record.date заменена или добавлена"""
        days = [record if day.date == record.date else day for day in self.days]
        if not self.has_day(record.date):
            days.append(record)
        return self.with_days(days)

    def to_dict(self) -> dict:
        return {
            "routines": list(self.routines),
            "days": [day.to_dict() for day in self.days],
            "version": self.version,
        }

    @classmethod
    def seeded(cls, today: str, routines: Iterable[str]) -> "Store":
        routines = list(routines)
        return cls(routines=routines, days=[DayRecord.empty(today, routines)], version=STORE_VERSION)

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  on_invalid_day: Optional[Callable[[Any, ValueError], None]] = None) -> "Store":
        """
        Store из словаря.

        Без on_invalid_day любая некорректная запись дня - ValueError;
        с ним такие записи передаются в callback и пропускаются.
        """
        routines = data.get("routines")
        days = data.get("days")
        if not isinstance(routines, list) or not isinstance(days, list):
            raise ValueError("Store requires 'routines' and 'days' lists")
        version = data.get("version", STORE_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            version = STORE_VERSION
        parsed = []
        for day in days:
            try:
                parsed.append(DayRecord.from_dict(day))
            except ValueError as e:
                if on_invalid_day is None:
                    raise
                on_invalid_day(day, e)
        return cls(routines=[str(r) for r in routines], days=parsed, version=version)
