#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Statistics Engine
Производные показатели: серии, недельный прогресс, итоги, дневной ряд

Все вычисления пересчитываются на каждый запрос по текущим данным
реестра и журнала, собственного состояния нет.

Версия: 1.0.0
"""

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from .models import (
    HabitCategory, HabitId, WeeklyProgress, DailyPoint,
    CompletionRate, HabitSummary, Overview
)
from .registry import HabitRegistry
from .completions import CompletionLog
from ..utils.datetime_utils import days_back, to_date_key, week_bounds

logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7

def percent(part: int, whole: int) -> int:
    """Целый процент с округлением половины вверх, 0 при whole == 0"""
    if whole <= 0:
        return 0
    value = Decimal(part) * 100 / Decimal(whole)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

class StatisticsCalculator:
    """Калькулятор статистики поверх реестра и журнала выполнений.

    Учитываются только привычки, присутствующие в реестре на момент запроса:
    для неизвестного id все показатели равны нулю.
    """

    def __init__(self, registry: HabitRegistry, completion_log: CompletionLog,
                 week_start: str = "sunday"):
        self.registry = registry
        self.completion_log = completion_log
        self.week_start = week_start

    def _is_completed(self, habit_id: HabitId, day: date) -> bool:
        return self.completion_log.is_completed(habit_id, day)

    # ===== PER HABIT =====

    def streak(self, habit_id: HabitId, as_of: date) -> int:
        """Текущая серия: подряд выполненные дни, заканчивая as_of"""
        if not self.registry.contains(habit_id):
            return 0

        streak = 0
        current_date = as_of
        while self._is_completed(habit_id, current_date):
            streak += 1
            current_date -= timedelta(days=1)

        return streak

    def longest_streak(self, habit_id: HabitId) -> int:
        """Самая длинная серия выполнения за всю историю"""
        if not self.registry.contains(habit_id):
            return 0

        completed_dates = sorted(self.completion_log.completed_dates(habit_id))
        if not completed_dates:
            return 0

        max_streak = 1
        current_streak = 1

        for i in range(1, len(completed_dates)):
            if completed_dates[i] == completed_dates[i - 1] + timedelta(days=1):
                current_streak += 1
                max_streak = max(max_streak, current_streak)
            else:
                current_streak = 1

        return max_streak

    def weekly_progress(self, habit_id: HabitId, as_of: date) -> WeeklyProgress:
        """Прогресс за календарную неделю, содержащую as_of"""
        if not self.registry.contains(habit_id):
            return WeeklyProgress()

        week_start, _ = week_bounds(as_of, self.week_start)
        completed = sum(
            1 for offset in range(DAYS_IN_WEEK)
            if self._is_completed(habit_id, week_start + timedelta(days=offset))
        )
        return WeeklyProgress(
            completed_count=completed,
            total_days=DAYS_IN_WEEK,
            percentage=percent(completed, DAYS_IN_WEEK)
        )

    def total_completions(self, habit_id: HabitId) -> int:
        """Количество дней с выполнением за всю историю"""
        if not self.registry.contains(habit_id):
            return 0
        return len(self.completion_log.completed_dates(habit_id))

    def habit_summary(self, habit_id: HabitId, as_of: date) -> Optional[HabitSummary]:
        habit = self.registry.get(habit_id)
        if habit is None:
            return None
        return HabitSummary(
            habit_id=habit.id,
            name=habit.name,
            streak=self.streak(habit.id, as_of),
            longest_streak=self.longest_streak(habit.id),
            weekly_progress=self.weekly_progress(habit.id, as_of),
            total_completions=self.total_completions(habit.id)
        )

    # ===== AGGREGATES =====

    def daily_series(self, window_days: int, as_of: date) -> List[DailyPoint]:
        """Ряд за последние window_days дней до as_of включительно, от старых к новым"""
        if window_days <= 0:
            return []

        habits = self.registry.list()
        series = []
        for day in days_back(as_of, window_days):
            completed = sum(1 for habit in habits if self._is_completed(habit.id, day))
            series.append(DailyPoint(
                date=to_date_key(day),
                completed_count=completed,
                total_habit_count=len(habits)
            ))
        return series

    def best_streak(self, as_of: date) -> int:
        """Максимальная текущая серия среди всех привычек"""
        streaks = [self.streak(habit.id, as_of) for habit in self.registry]
        return max(streaks) if streaks else 0

    def completion_rate(self, day: date) -> CompletionRate:
        """Доля привычек, выполненных в указанный день"""
        habits = self.registry.list()
        completed = sum(1 for habit in habits if self._is_completed(habit.id, day))
        return CompletionRate(
            completed=completed,
            total=len(habits),
            percentage=percent(completed, len(habits))
        )

    def total_completions_all(self) -> int:
        return sum(self.total_completions(habit.id) for habit in self.registry)

    def average_weekly_rate(self, as_of: date) -> int:
        """Среднее недельных процентов по всем привычкам"""
        habits = self.registry.list()
        if not habits:
            return 0
        total = sum(self.weekly_progress(habit.id, as_of).percentage for habit in habits)
        value = Decimal(total) / Decimal(len(habits))
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def category_breakdown(self) -> Dict[str, int]:
        """Количество привычек по категориям"""
        breakdown = {category.value: 0 for category in HabitCategory}
        for habit in self.registry:
            if isinstance(habit.category, str) and habit.category in breakdown:
                breakdown[habit.category] += 1
            else:
                logger.warning(f"Habit {habit.id} has unknown category {habit.category!r}")
        return breakdown

    def overview(self, as_of: date) -> Overview:
        return Overview(
            total_habits=len(self.registry),
            today=self.completion_rate(as_of),
            best_streak=self.best_streak(as_of),
            total_completions=self.total_completions_all(),
            average_weekly_rate=self.average_weekly_rate(as_of)
        )
