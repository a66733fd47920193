#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Habit Tracker
Фасад над реестром, журналом выполнений и хранилищем

Каждая изменяющая операция сразу сохраняет текущий снимок (write-through).
Если запись не удалась, трекер продолжает работу в памяти.

Версия: 1.0.0
"""

import logging
import threading
from datetime import date
from typing import Dict, List, Any, Union

from .models import Habit, HabitId, NotFoundError, StorageError, ValidationError
from .completions import CompletionLog
from .registry import HabitRegistry
from .statistics import StatisticsCalculator
from .database import HabitStorage, validate_snapshot
from ..utils.datetime_utils import as_date, now_iso, today_in

logger = logging.getLogger(__name__)

class HabitTracker:
    """Состояние приложения: один реестр, один журнал, одно хранилище"""

    def __init__(self, storage: HabitStorage, timezone: str = "UTC",
                 week_start: str = "sunday"):
        self.storage = storage
        self.timezone = timezone
        self.week_start = week_start
        self.storage_available = True
        self.lock = threading.RLock()

        self.completion_log = CompletionLog()
        self.registry = HabitRegistry(self.completion_log)
        self.load()

    @classmethod
    def from_config(cls, app_config) -> "HabitTracker":
        return cls(
            storage=HabitStorage.from_config(app_config),
            timezone=app_config.tracker.timezone,
            week_start=app_config.tracker.week_start.value
        )

    # ===== STATE =====

    def _replace_state(self, registry: HabitRegistry, completion_log: CompletionLog) -> None:
        self.registry = registry
        self.completion_log = completion_log

    def load(self) -> None:
        """Загрузить состояние из хранилища"""
        data = self.storage.load()
        completion_log = CompletionLog.from_dict(data["completions"])
        registry = HabitRegistry.from_list(data["habits"], completion_log)
        self._replace_state(registry, completion_log)
        if self.storage.seeded or self.storage.restored:
            self._persist()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "habits": self.registry.to_list(),
            "completions": self.completion_log.to_dict()
        }

    def _persist(self) -> None:
        snapshot = self.snapshot()
        try:
            self.storage.save(snapshot["habits"], snapshot["completions"])
            self.storage_available = True
        except StorageError as e:
            self.storage_available = False
            logger.error(f"Persisting failed, continuing in memory: {e}")

    @property
    def statistics(self) -> StatisticsCalculator:
        return StatisticsCalculator(self.registry, self.completion_log, self.week_start)

    def today(self) -> date:
        return today_in(self.timezone)

    def resolve_day(self, day: Union[date, str, None]) -> date:
        if day is None:
            return self.today()
        try:
            return as_date(day)
        except ValueError:
            raise ValidationError(f"Invalid date {day!r}, expected YYYY-MM-DD")

    # ===== HABITS =====

    def list_habits(self) -> List[Habit]:
        return self.registry.list()

    def get_habit(self, habit_id: HabitId) -> Habit:
        habit = self.registry.get(habit_id)
        if habit is None:
            raise NotFoundError(habit_id)
        return habit

    def add_habit(self, draft: Dict[str, Any]) -> Habit:
        with self.lock:
            habit = self.registry.add(draft)
            self._persist()
            return habit

    def update_habit(self, habit_id: HabitId, fields: Dict[str, Any]) -> Habit:
        with self.lock:
            if not self.registry.update(habit_id, fields):
                raise NotFoundError(habit_id)
            self._persist()
            return self.get_habit(habit_id)

    def delete_habit(self, habit_id: HabitId) -> None:
        with self.lock:
            if not self.registry.delete(habit_id):
                raise NotFoundError(habit_id)
            self._persist()

    # ===== COMPLETIONS =====

    def toggle_completion(self, habit_id: HabitId, day: Union[date, str, None] = None) -> bool:
        with self.lock:
            habit = self.get_habit(habit_id)
            state = self.completion_log.toggle(habit.id, self.resolve_day(day))
            self._persist()
            return state

    def is_completed(self, habit_id: HabitId, day: Union[date, str, None] = None) -> bool:
        return self.completion_log.is_completed(habit_id, self.resolve_day(day))

    # ===== IMPORT / EXPORT =====

    def import_snapshot(self, data: Any) -> Dict[str, int]:
        """Заменить состояние снимком; при ошибке формата ничего не меняется"""
        with self.lock:
            habits, completions = validate_snapshot(data)
            completion_log = CompletionLog.from_dict(completions)
            registry = HabitRegistry.from_list(habits, completion_log)
            orphans = completion_log.reconcile(registry.ids())

            try:
                self.storage.import_snapshot({
                    "habits": registry.to_list(),
                    "completions": completion_log.to_dict()
                })
                self.storage_available = True
            except StorageError as e:
                self.storage_available = False
                logger.error(f"Import not persisted, continuing in memory: {e}")

            self._replace_state(registry, completion_log)
            return {"habits": len(registry), "orphanedEntriesRemoved": orphans}

    def export_snapshot(self) -> Dict[str, Any]:
        data = self.snapshot()
        data["exportDate"] = now_iso()
        return data

    def clear_all_data(self) -> None:
        with self.lock:
            try:
                self.storage.clear()
            except StorageError as e:
                logger.error(f"Clearing storage failed: {e}")
            completion_log = CompletionLog()
            self._replace_state(HabitRegistry(completion_log), completion_log)

    # ===== STATISTICS =====

    def streak(self, habit_id: HabitId, as_of: Union[date, str, None] = None) -> int:
        return self.statistics.streak(habit_id, self.resolve_day(as_of))

    def weekly_progress(self, habit_id: HabitId, as_of: Union[date, str, None] = None):
        return self.statistics.weekly_progress(habit_id, self.resolve_day(as_of))

    def total_completions(self, habit_id: HabitId) -> int:
        return self.statistics.total_completions(habit_id)

    def daily_series(self, window_days: int, as_of: Union[date, str, None] = None):
        return self.statistics.daily_series(window_days, self.resolve_day(as_of))

    def best_streak(self, as_of: Union[date, str, None] = None) -> int:
        return self.statistics.best_streak(self.resolve_day(as_of))

    def habit_summary(self, habit_id: HabitId, as_of: Union[date, str, None] = None):
        summary = self.statistics.habit_summary(habit_id, self.resolve_day(as_of))
        if summary is None:
            raise NotFoundError(habit_id)
        return summary

    def overview(self, as_of: Union[date, str, None] = None):
        return self.statistics.overview(self.resolve_day(as_of))
