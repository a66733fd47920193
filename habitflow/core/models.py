#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Core Data Models
Модели данных с валидацией и типизацией

Версия: 1.0.0
"""

from typing import Dict, Optional, Union, Any
from dataclasses import dataclass, field, asdict
from enum import Enum
import logging

from ..utils.datetime_utils import now_iso
from ..utils.validators import is_valid_color, is_valid_target_days

logger = logging.getLogger(__name__)

HabitId = Union[int, str]

# ===== ENUMS =====

class HabitCategory(Enum):
    """Категории привычек"""
    WELLNESS = "wellness"
    FITNESS = "fitness"
    LEARNING = "learning"
    PRODUCTIVITY = "productivity"
    CREATIVE = "creative"

DEFAULT_COLOR = "bg-blue-500"

# Поля привычки, которые можно менять через update
MUTABLE_FIELDS = ("name", "description", "category", "color", "icon", "targetDays")

# ===== EXCEPTIONS =====

class HabitFlowError(Exception):
    """Базовое исключение приложения"""
    pass

class NotFoundError(HabitFlowError):
    """Привычка с указанным id не найдена"""

    def __init__(self, habit_id: HabitId):
        super().__init__(f"Habit {habit_id} not found")
        self.habit_id = habit_id

class ValidationError(HabitFlowError):
    """Ошибка валидации данных"""
    pass

class StorageError(HabitFlowError):
    """Ошибка чтения или записи хранилища"""
    pass

# ===== VALIDATION HELPERS =====

def validate_text(text: str, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} must be a string")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} must contain at least {min_length} characters")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} must contain at most {max_length} characters")

    return text

def validate_enum_value(value: str, enum_class: type, field_name: str = "value") -> str:
    """Валидация значений enum"""
    try:
        enum_class(value)
        return value
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} must be one of: {valid_values}")

def validate_habit_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Проверка и нормализация пользовательских полей привычки.

    Принимает только известные изменяемые поля, неизвестные ключи отбрасываются.
    """
    cleaned: Dict[str, Any] = {}

    for key, value in fields.items():
        if key not in MUTABLE_FIELDS:
            logger.debug(f"Ignoring unknown habit field {key!r}")
            continue

        if key == "name":
            cleaned[key] = validate_text(value, min_length=1, max_length=200, field_name="name")
        elif key == "description":
            cleaned[key] = validate_text(value or "", min_length=0, max_length=1000, field_name="description")
        elif key == "category":
            cleaned[key] = validate_enum_value(value, HabitCategory, "category")
        elif key == "color":
            if not is_valid_color(value):
                raise ValidationError(f"color has invalid format: {value!r}")
            cleaned[key] = value
        elif key == "icon":
            if value is not None:
                value = validate_text(value, min_length=0, max_length=50, field_name="icon")
            cleaned[key] = value or None
        elif key == "targetDays":
            if not is_valid_target_days(value):
                raise ValidationError("targetDays must be an integer from 1 to 7")
            cleaned[key] = value

    return cleaned

# ===== CORE MODELS =====

@dataclass
class Habit:
    """Привычка пользователя"""
    id: HabitId
    name: str
    description: str = ""
    category: str = HabitCategory.WELLNESS.value
    color: str = DEFAULT_COLOR
    target_days: int = 7
    created_at: str = field(default_factory=now_iso)
    icon: Optional[str] = None

    def apply(self, fields: Dict[str, Any]) -> None:
        """Применить уже проверенные поля (id и createdAt не меняются)"""
        for key, value in fields.items():
            if key == "targetDays":
                self.target_days = value
            elif key in MUTABLE_FIELDS:
                setattr(self, key, value)

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в формат хранилища (camelCase ключи)"""
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "color": self.color,
            "targetDays": self.target_days,
            "createdAt": self.created_at
        }
        if self.icon is not None:
            data["icon"] = self.icon
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        """Десериализация из словаря.

        Записи из хранилища и импорта принимаются как есть, без проверки
        значений; отсутствие id считается ошибкой.
        """
        try:
            return cls(
                id=data["id"],
                name=data.get("name", ""),
                description=data.get("description", ""),
                category=data.get("category", HabitCategory.WELLNESS.value),
                color=data.get("color", DEFAULT_COLOR),
                target_days=data.get("targetDays", 7),
                created_at=data.get("createdAt") or now_iso(),
                icon=data.get("icon")
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValidationError(f"Failed to load habit record: {e}")

    @classmethod
    def create(cls, habit_id: HabitId, draft: Dict[str, Any]) -> "Habit":
        """Создание новой привычки из черновика"""
        if "name" not in draft:
            raise ValidationError("name is required")
        fields = validate_habit_fields(draft)
        habit = cls(id=habit_id, name=fields["name"])
        habit.apply(fields)
        return habit

# ===== STATISTICS RESULTS =====

@dataclass
class WeeklyProgress:
    """Прогресс привычки за календарную неделю"""
    completed_count: int = 0
    total_days: int = 7
    percentage: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completedCount": self.completed_count,
            "totalDays": self.total_days,
            "percentage": self.percentage
        }

@dataclass
class DailyPoint:
    """Точка дневного ряда для графика"""
    date: str
    completed_count: int
    total_habit_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "completedCount": self.completed_count,
            "totalHabitCount": self.total_habit_count
        }

@dataclass
class CompletionRate:
    """Доля выполненных привычек за день"""
    completed: int = 0
    total: int = 0
    percentage: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass
class HabitSummary:
    """Сводка по одной привычке"""
    habit_id: HabitId
    name: str
    streak: int
    longest_streak: int
    weekly_progress: WeeklyProgress
    total_completions: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "name": self.name,
            "streak": self.streak,
            "longestStreak": self.longest_streak,
            "weeklyProgress": self.weekly_progress.to_dict(),
            "totalCompletions": self.total_completions
        }

@dataclass
class Overview:
    """Сводные показатели для главного экрана и статистики"""
    total_habits: int
    today: CompletionRate
    best_streak: int
    total_completions: int
    average_weekly_rate: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalHabits": self.total_habits,
            "today": self.today.to_dict(),
            "bestStreak": self.best_streak,
            "totalCompletions": self.total_completions,
            "averageWeeklyRate": self.average_weekly_rate
        }

# ===== EXPORT =====

__all__ = [
    # Enums
    'HabitCategory',

    # Exceptions
    'HabitFlowError', 'NotFoundError', 'ValidationError', 'StorageError',

    # Validation functions
    'validate_text', 'validate_enum_value', 'validate_habit_fields',

    # Models
    'Habit', 'WeeklyProgress', 'DailyPoint', 'CompletionRate', 'HabitSummary', 'Overview'
]
