#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Core Package
Модели, журнал выполнений, реестр привычек, статистика и хранилище
"""

from .models import (
    HabitCategory,
    HabitFlowError,
    NotFoundError,
    ValidationError,
    StorageError,
    Habit,
    WeeklyProgress,
    DailyPoint,
    CompletionRate,
    HabitSummary,
    Overview
)
from .completions import CompletionLog
from .registry import HabitRegistry
from .statistics import StatisticsCalculator, percent
from .database import HabitStorage, BackupManager, JsonKeyValueStore, validate_snapshot
from .tracker import HabitTracker

__all__ = [
    # Enums
    'HabitCategory',

    # Exceptions
    'HabitFlowError',
    'NotFoundError',
    'ValidationError',
    'StorageError',

    # Models
    'Habit',
    'WeeklyProgress',
    'DailyPoint',
    'CompletionRate',
    'HabitSummary',
    'Overview',

    # Stores
    'CompletionLog',
    'HabitRegistry',
    'HabitStorage',
    'BackupManager',
    'JsonKeyValueStore',
    'validate_snapshot',

    # Statistics
    'StatisticsCalculator',
    'percent',

    # Facade
    'HabitTracker'
]
