#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Stats Engine
Производная статистика: выполнение по дням, накопительный счёт, тепловая карта

Все функции чистые и не изменяют переданные записи.
"""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence

from models.routine import DayRecord
from models.stats import DayStat, DerivedStats, HeatmapCell, HistoryRow, ScorePoint
from utils.datetime_utils import date_range, format_date

HEATMAP_WEEKS = 52
HISTORY_LIMIT = 14

def is_success(completed: int, routine_count: int) -> bool:
    """Успешный день - выполнено строго больше половины рутин"""
    return completed > routine_count / 2

def sorted_days(days: Iterable[DayRecord]) -> List[DayRecord]:
    # Формат YYYY-MM-DD: лексикографический порядок совпадает с хронологическим
    return sorted(days, key=lambda d: d.date)

def per_day_stats(days: Iterable[DayRecord], routine_count: int) -> List[DayStat]:
    stats = []
    for day in sorted_days(days):
        completed = day.completed
        stats.append(DayStat(date=day.date, completed=completed,
                             success=is_success(completed, routine_count)))
    return stats

def cumulative_series(per_day: Sequence[DayStat]) -> List[ScorePoint]:
    """+1 за успешный день, -1 за остальные, нарастающим итогом"""
    score = 0
    series = []
    for stat in per_day:
        score += 1 if stat.success else -1
        series.append(ScorePoint(date=stat.date, score=score))
    return series

def heatmap(days: Iterable[DayRecord], today: date, weeks: int = HEATMAP_WEEKS) -> List[HeatmapCell]:
    """Ровно 7 * weeks дней, заканчивая сегодняшним; пропуски = 0"""
    index: Dict[str, DayRecord] = {day.date: day for day in days}
    start = today - timedelta(days=7 * weeks - 1)
    cells = []
    for current in date_range(start, today):
        key = format_date(current)
        record = index.get(key)
        cells.append(HeatmapCell(date=key, completed=record.completed if record else 0))
    return cells

def heatmap_weeks(cells: Sequence[HeatmapCell]) -> List[List[HeatmapCell]]:
    """Колонки по неделям, новая колонка начинается с понедельника"""
    weeks: List[List[HeatmapCell]] = []
    bucket: List[HeatmapCell] = []
    for cell in cells:
        weekday = date.fromisoformat(cell.date).weekday()  # 0 = понедельник
        if weekday == 0 and bucket:
            weeks.append(bucket)
            bucket = []
        bucket.append(cell)
    if bucket:
        weeks.append(bucket)
    return weeks

def history(days: Iterable[DayRecord], routines: Sequence[str], limit: int = HISTORY_LIMIT) -> List[HistoryRow]:
    """Последние limit дней для таблицы истории"""
    routine_count = len(routines)
    recent = sorted_days(days)[-limit:] if limit > 0 else []
    rows = []
    for day in recent:
        checks = {routine: day.is_checked(routine) for routine in routines}
        # completed - только по текущему набору рутин; success - как в счёте
        rows.append(HistoryRow(
            date=day.date,
            checks=checks,
            completed=sum(1 for value in checks.values() if value),
            success=is_success(day.completed, routine_count)
        ))
    return rows

def summarize(days: Sequence[DayRecord], routine_count: int, today: date,
              weeks: int = HEATMAP_WEEKS) -> DerivedStats:
    per_day = per_day_stats(days, routine_count)
    cells = heatmap(days, today, weeks)
    return DerivedStats(
        routine_count=routine_count,
        per_day=per_day,
        series=cumulative_series(per_day),
        heatmap=cells,
        weeks=heatmap_weeks(cells)
    )
