#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Models Package
Data models and enums for the routine tracker
"""

from .enums import (
    SyncStatus,
    PullStatus,
    UpsertOutcome
)

from .routine import (
    STORE_VERSION,
    DayRecord,
    Store,
    unique_by_date
)

from .stats import (
    DayStat,
    ScorePoint,
    HeatmapCell,
    HistoryRow,
    DerivedStats
)

from .sync import (
    SyncResult,
    PullResult
)

__all__ = [
    # Enums
    'SyncStatus',
    'PullStatus',
    'UpsertOutcome',

    # Store models
    'STORE_VERSION',
    'DayRecord',
    'Store',
    'unique_by_date',

    # Derived stats
    'DayStat',
    'ScorePoint',
    'HeatmapCell',
    'HistoryRow',
    'DerivedStats',

    # Sync results
    'SyncResult',
    'PullResult'
]
