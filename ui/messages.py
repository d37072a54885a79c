# ui/messages.py

from typing import List, Sequence

from models.routine import DayRecord
from models.stats import DerivedStats, HeatmapCell, HistoryRow, ScorePoint
from ui.progress import heat_symbol, routines_progress_bar, score_emoji, HEAT_SYMBOLS

WEEKDAY_LABELS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]

def today_message(record: DayRecord, routines: Sequence[str]):
    lines = [f"📅 {record.date}"]
    for idx, routine in enumerate(routines, 1):
        status = "✅" if record.is_checked(routine) else "⬜️"
        lines.append(f"{idx}. {status} {routine}")
    done = sum(1 for r in routines if record.is_checked(r))
    lines.append(routines_progress_bar(done, len(routines)))
    return "\n".join(lines)

def heatmap_message(weeks: List[List[HeatmapCell]], routine_count: int):
    """Сетка 7 x N: строки - дни недели, колонки - недели"""
    rows = []
    for weekday, label in enumerate(WEEKDAY_LABELS):
        cells = []
        for index, week in enumerate(weeks):
            cell = _cell_for_weekday(week, weekday, first=index == 0)
            cells.append(heat_symbol(cell.completed) if cell else " ")
        rows.append(f"{label} " + "".join(cells))
    legend = " ".join(HEAT_SYMBOLS)
    rows.append(f"0 {legend} {len(HEAT_SYMBOLS) - 1}+ (из {routine_count})")
    return "\n".join(rows)

def _cell_for_weekday(week: List[HeatmapCell], weekday: int, first: bool):
    # Первая неделя может начинаться не с понедельника
    offset = 7 - len(week) if first else 0
    position = weekday - offset
    if 0 <= position < len(week):
        return week[position]
    return None

def score_chart_message(series: Sequence[ScorePoint], width: int = 60):
    """Компактный график накопительного счёта (последние width дней)"""
    if not series:
        return "Нет данных для графика"
    points = list(series)[-width:]
    low = min(min(p.score for p in points), 0)
    high = max(max(p.score for p in points), 0)
    lines = []
    for level in range(high, low - 1, -1):
        marks = "".join("●" if p.score == level else ("─" if level == 0 else " ") for p in points)
        lines.append(f"{level:>4} {marks}")
    lines.append(f"     {points[0].date} … {points[-1].date}")
    return "\n".join(lines)

def history_message(rows: Sequence[HistoryRow], routines: Sequence[str]):
    if not rows:
        return "История пуста"
    header = ["Date"] + list(routines) + ["Done", "+/-"]
    widths = [max(10, len(header[0]))] + [max(2, len(r)) for r in routines] + [5, 3]
    lines = ["  ".join(h.ljust(w) for h, w in zip(header, widths))]
    for row in rows:
        cells = [row.date]
        cells += ["✓" if row.checks.get(r) else "–" for r in routines]
        cells += [f"{row.completed}/{len(routines)}", "+1" if row.success else "-1"]
        lines.append("  ".join(c.ljust(w) for c, w in zip(cells, widths)))
    return "\n".join(lines)

def stats_message(stats: DerivedStats):
    score = stats.current_score
    return (
        f"📊 Статистика:\n"
        f"Дней в истории: {stats.total_days}\n"
        f"Успешных дней: {stats.success_days}\n"
        f"Счёт: {score} {score_emoji(score)}"
    )
