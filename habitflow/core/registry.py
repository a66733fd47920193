#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Habit Registry
Реестр привычек в порядке добавления

Версия: 1.0.0
"""

import logging
import time
from typing import Dict, List, Optional, Any

from .models import Habit, HabitId, ValidationError, validate_habit_fields
from .completions import CompletionLog, habit_key

logger = logging.getLogger(__name__)

class HabitRegistry:
    """Реестр привычек.

    Удаление привычки каскадно чистит связанный журнал выполнений.
    update/delete для отсутствующего id ничего не делают и возвращают False.
    """

    def __init__(self, completion_log: CompletionLog, habits: Optional[List[Habit]] = None):
        self.completion_log = completion_log
        self._habits: List[Habit] = []
        self._last_id = 0
        for habit in habits or []:
            self._append(habit)

    def _append(self, habit: Habit) -> None:
        if self.contains(habit.id):
            raise ValidationError(f"Duplicate habit id: {habit.id}")
        self._habits.append(habit)
        if isinstance(habit.id, int) and not isinstance(habit.id, bool):
            self._last_id = max(self._last_id, habit.id)

    def _next_id(self) -> int:
        """Новый id: миллисекунды эпохи, но всегда больше любого выданного"""
        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        return self._last_id

    # ===== OPERATIONS =====

    def add(self, draft: Dict[str, Any]) -> Habit:
        """Добавить привычку из черновика, назначив id и createdAt"""
        habit = Habit.create(self._next_id(), draft)
        self._habits.append(habit)
        logger.info(f"Habit added: {habit.id} ({habit.name})")
        return habit

    def update(self, habit_id: HabitId, fields: Dict[str, Any]) -> bool:
        habit = self.get(habit_id)
        if habit is None:
            logger.debug(f"Update skipped, habit {habit_id} not found")
            return False
        habit.apply(validate_habit_fields(fields))
        logger.info(f"Habit updated: {habit.id}")
        return True

    def delete(self, habit_id: HabitId) -> bool:
        habit = self.get(habit_id)
        if habit is None:
            logger.debug(f"Delete skipped, habit {habit_id} not found")
            return False
        self._habits.remove(habit)
        self.completion_log.purge(habit.id)
        logger.info(f"Habit deleted: {habit.id}")
        return True

    def list(self) -> List[Habit]:
        return list(self._habits)

    # ===== QUERIES =====

    def get(self, habit_id: HabitId) -> Optional[Habit]:
        key = habit_key(habit_id)
        for habit in self._habits:
            if habit_key(habit.id) == key:
                return habit
        return None

    def contains(self, habit_id: HabitId) -> bool:
        return self.get(habit_id) is not None

    def ids(self) -> List[HabitId]:
        return [habit.id for habit in self._habits]

    def __len__(self) -> int:
        return len(self._habits)

    def __iter__(self):
        return iter(list(self._habits))

    # ===== SERIALIZATION =====

    def to_list(self) -> List[Dict[str, Any]]:
        return [habit.to_dict() for habit in self._habits]

    @classmethod
    def from_list(cls, records: List[Any], completion_log: CompletionLog) -> "HabitRegistry":
        """Восстановить реестр из списка записей.

        Некорректные записи и повторяющиеся id пропускаются с предупреждением.
        """
        if not isinstance(records, list):
            raise ValidationError("habits must be a list")

        registry = cls(completion_log)
        for record in records:
            try:
                if not isinstance(record, dict):
                    raise ValidationError(f"habit record must be an object, got {type(record).__name__}")
                registry._append(Habit.from_dict(record))
            except ValidationError as e:
                logger.warning(f"Skipping habit record: {e}")
        return registry
