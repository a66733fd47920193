#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Completion Log
Журнал выполнений: дата (YYYY-MM-DD) -> id привычки -> bool

Версия: 1.0.0
"""

import logging
from datetime import date
from typing import Dict, Iterable, Set, Union, Any

from .models import HabitId, ValidationError
from ..utils.datetime_utils import as_date, parse_date_key, to_date_key
from ..utils.validators import is_valid_date

logger = logging.getLogger(__name__)

DateLike = Union[date, str]

def habit_key(habit_id: HabitId) -> str:
    """Ключ привычки в журнале. В JSON ключи всегда строки."""
    return str(habit_id)

class CompletionLog:
    """Журнал выполнений привычек.

    Отсутствующая запись и явный False означают одно и то же: привычка
    в этот день не выполнена.
    """

    def __init__(self, entries: Dict[str, Dict[str, bool]] = None):
        self._entries: Dict[str, Dict[str, bool]] = {}
        if entries:
            self._load_entries(entries)

    def _load_entries(self, entries: Dict[str, Any]) -> None:
        for date_key, day in entries.items():
            if not is_valid_date(date_key) or not isinstance(day, dict):
                logger.warning(f"Skipping malformed completion bucket {date_key!r}")
                continue
            self._entries[date_key] = {habit_key(k): bool(v) for k, v in day.items()}

    # ===== OPERATIONS =====

    def toggle(self, habit_id: HabitId, day: DateLike) -> bool:
        """Переключить отметку выполнения, вернуть новое состояние"""
        date_key = to_date_key(as_date(day))
        bucket = self._entries.setdefault(date_key, {})
        key = habit_key(habit_id)
        bucket[key] = not bucket.get(key, False)
        return bucket[key]

    def is_completed(self, habit_id: HabitId, day: DateLike) -> bool:
        date_key = to_date_key(as_date(day))
        return bool(self._entries.get(date_key, {}).get(habit_key(habit_id), False))

    def purge(self, habit_id: HabitId) -> None:
        """Удалить все записи привычки за все даты"""
        key = habit_key(habit_id)
        removed = 0
        for date_key in list(self._entries):
            bucket = self._entries[date_key]
            if key in bucket:
                del bucket[key]
                removed += 1
            if not bucket:
                del self._entries[date_key]
        if removed:
            logger.info(f"Purged {removed} completion entries for habit {habit_id}")

    def reconcile(self, valid_ids: Iterable[HabitId]) -> int:
        """Удалить записи, ссылающиеся на несуществующие привычки"""
        valid = {habit_key(habit_id) for habit_id in valid_ids}
        orphans = {
            key
            for bucket in self._entries.values()
            for key in bucket
            if key not in valid
        }
        removed = 0
        for date_key in list(self._entries):
            bucket = self._entries[date_key]
            for key in orphans & bucket.keys():
                del bucket[key]
                removed += 1
            if not bucket:
                del self._entries[date_key]
        if removed:
            logger.info(f"Reconciled completion log: removed {removed} orphaned entries")
        return removed

    # ===== QUERIES =====

    def completed_dates(self, habit_id: HabitId) -> Set[date]:
        """Все даты, в которые привычка отмечена выполненной"""
        key = habit_key(habit_id)
        return {
            parse_date_key(date_key)
            for date_key, bucket in self._entries.items()
            if bucket.get(key)
        }

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._entries.values())

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Dict[str, bool]]:
        return {date_key: dict(bucket) for date_key, bucket in sorted(self._entries.items())}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompletionLog":
        if not isinstance(data, dict):
            raise ValidationError("completions must be a mapping of date to habit states")
        return cls(data)
