# utils/datetime_utils.py

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

import pytz

def now_local(tz_name: Optional[str] = None) -> datetime:
    """Текущее время в локальной зоне (или в указанной pytz зоне)"""
    if tz_name:
        return datetime.now(pytz.timezone(tz_name))
    return datetime.now()

def format_date(d: Union[date, datetime]) -> str:
    # strftime не дополняет год нулями на всех платформах
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"

def today(tz_name: Optional[str] = None) -> date:
    return now_local(tz_name).date()

def date_range(start: date, end: date) -> Iterator[date]:
    """Все даты от start до end включительно"""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
