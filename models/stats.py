# models/stats.py

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

@dataclass(frozen=True)
class DayStat:
    date: str
    completed: int
    success: bool

@dataclass(frozen=True)
class ScorePoint:
    date: str
    score: int

@dataclass(frozen=True)
class HeatmapCell:
    date: str
    completed: int

@dataclass(frozen=True)
class HistoryRow:
    date: str
    checks: Dict[str, bool]
    completed: int
    success: bool

@dataclass
class DerivedStats:
    """Производная статистика, пересчитывается при каждом чтении"""
    routine_count: int
    per_day: List[DayStat] = field(default_factory=list)
    series: List[ScorePoint] = field(default_factory=list)
    heatmap: List[HeatmapCell] = field(default_factory=list)
    weeks: List[List[HeatmapCell]] = field(default_factory=list)

    @property
    def current_score(self) -> int:
        return self.series[-1].score if self.series else 0

    @property
    def success_days(self) -> int:
        return sum(1 for d in self.per_day if d.success)

    @property
    def total_days(self) -> int:
        return len(self.per_day)

    @property
    def best_score(self) -> Optional[int]:
        return max((p.score for p in self.series), default=None)

    def to_dict(self) -> dict:
        return {
            "routine_count": self.routine_count,
            "current_score": self.current_score,
            "success_days": self.success_days,
            "total_days": self.total_days,
            "per_day": [asdict(d) for d in self.per_day],
            "series": [asdict(p) for p in self.series],
        }
