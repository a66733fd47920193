#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Storage Manager
Хранение привычек и журнала выполнений в JSON файлах с резервным копированием

Версия: 1.0.0
"""

import json
import gzip
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple
import logging

from .models import StorageError, ValidationError
from ..utils.datetime_utils import now_iso

logger = logging.getLogger(__name__)

HABITS_KEY = "habits"
COMPLETIONS_KEY = "completions"
PREFERENCES_KEY = "settings"

DEFAULT_PREFERENCES = {
    "notifications": True,
    "darkMode": False,
}

def sample_habits() -> List[Dict[str, Any]]:
    """Стартовый набор привычек для первого запуска"""
    created_at = now_iso()
    return [
        {
            "id": 1,
            "name": "Morning Meditation",
            "description": "Start the day with mindfulness",
            "category": "wellness",
            "color": "bg-blue-500",
            "icon": "Brain",
            "targetDays": 7,
            "createdAt": created_at
        },
        {
            "id": 2,
            "name": "Read for 30 minutes",
            "description": "Daily reading habit",
            "category": "learning",
            "color": "bg-green-500",
            "icon": "Book",
            "targetDays": 7,
            "createdAt": created_at
        },
        {
            "id": 3,
            "name": "Exercise",
            "description": "Stay active and healthy",
            "category": "fitness",
            "color": "bg-red-500",
            "icon": "Activity",
            "targetDays": 5,
            "createdAt": created_at
        }
    ]

def validate_snapshot(data: Any) -> Tuple[List[Any], Dict[str, Any]]:
    """Проверка верхнего уровня снимка для импорта.

    Глубже схема не проверяется: записи привычек принимаются как есть.
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid backup file format: expected a JSON object")

    missing = [key for key in (HABITS_KEY, COMPLETIONS_KEY) if key not in data]
    if missing:
        raise ValidationError(f"Invalid backup file format: missing {', '.join(missing)}")

    habits = data[HABITS_KEY]
    completions = data[COMPLETIONS_KEY]
    if not isinstance(habits, list):
        raise ValidationError("Invalid backup file format: habits must be a list")
    if not isinstance(completions, dict):
        raise ValidationError("Invalid backup file format: completions must be an object")

    return habits, completions

# ===== HELPER CLASSES =====

class JsonKeyValueStore:
    """Простое key-value хранилище: один JSON файл на ключ"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def get(self, key: str, default: Any = None) -> Any:
        """Прочитать значение; StorageError при повреждённом файле"""
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}")

    def set(self, key: str, value: Any) -> None:
        """Атомарная запись через временный файл"""
        path = self._path(key)
        temp_file = path.with_suffix('.tmp')

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            temp_file.replace(path)
        except (OSError, TypeError, ValueError) as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Failed to write {path}: {e}")

    def remove(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}")
        return True

    def quarantine(self, key: str) -> Optional[Path]:
        """Отложить повреждённый файл в сторону"""
        path = self._path(key)
        if not path.exists():
            return None
        target = path.with_suffix(f".corrupt-{datetime.now().strftime('%Y%m%d_%H%M%S')}")
        try:
            shutil.move(str(path), str(target))
        except OSError as e:
            logger.error(f"Failed to move corrupted file {path}: {e}")
            return None
        logger.warning(f"Corrupted file moved to {target}")
        return target

class BackupManager:
    """Менеджер резервных копий снимков данных"""

    def __init__(self, backup_dir: Path, max_backups: int = 10):
        self.backup_dir = Path(backup_dir)
        self.max_backups = max_backups

    def create_backup(self, snapshot: Dict[str, Any], reason: str = "manual") -> Optional[Path]:
        """Создать сжатую резервную копию снимка"""
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
            backup_path = self.backup_dir / f"backup_{timestamp}_{reason}.json.gz"

            with gzip.open(backup_path, 'wt', encoding='utf-8') as f:
                json.dump(snapshot, f, ensure_ascii=False)

            logger.info(f"Backup created: {backup_path}")
            self._cleanup_old_backups()
            return backup_path

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to create backup: {e}")
            return None

    def read_backup(self, backup_path: Path) -> Dict[str, Any]:
        """Прочитать снимок из резервной копии"""
        try:
            with gzip.open(backup_path, 'rt', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read backup {backup_path}: {e}")

    def list_backups(self) -> List[Dict[str, Any]]:
        """Список резервных копий, новые первыми"""
        backups = []

        for backup_file in self.backup_dir.glob("backup_*.json.gz"):
            try:
                stat = backup_file.stat()
                backups.append({
                    'name': backup_file.name,
                    'path': str(backup_file),
                    'size_kb': round(stat.st_size / 1024, 2),
                    'created': datetime.fromtimestamp(stat.st_mtime).isoformat()
                })
            except OSError as e:
                logger.warning(f"Failed to get info for backup {backup_file}: {e}")

        return sorted(backups, key=lambda x: x['name'], reverse=True)

    def _cleanup_old_backups(self) -> None:
        """Удалить старые резервные копии сверх лимита"""
        backups = sorted(self.backup_dir.glob("backup_*.json.gz"), key=lambda x: x.name, reverse=True)

        for backup in backups[self.max_backups:]:
            try:
                backup.unlink()
                logger.info(f"Removed old backup: {backup}")
            except OSError as e:
                logger.error(f"Failed to remove old backup {backup}: {e}")

# ===== STORAGE =====

class HabitStorage:
    """Адаптер хранения привычек и журнала выполнений.

    load() никогда не бросает исключений: отсутствующие или повреждённые
    данные заменяются значениями по умолчанию. Ошибки записи поднимаются
    как StorageError.
    """

    def __init__(self, data_dir: Path, backup_dir: Optional[Path] = None,
                 max_backups: int = 10, auto_backup: bool = True,
                 seed_sample_habits: bool = False):
        self.store = JsonKeyValueStore(data_dir)
        self.backup_manager = BackupManager(backup_dir or Path(data_dir) / "backups", max_backups)
        self.auto_backup = auto_backup
        self.seed_sample_habits = seed_sample_habits
        self.seeded = False
        self.restored = False

    @classmethod
    def from_config(cls, app_config) -> "HabitStorage":
        return cls(
            data_dir=app_config.storage.data_dir,
            backup_dir=app_config.storage.backup_dir,
            max_backups=app_config.storage.max_backups,
            auto_backup=app_config.storage.auto_backup,
            seed_sample_habits=app_config.tracker.seed_sample_habits
        )

    def _read(self, key: str, expected_type: type, default: Any) -> Tuple[Any, bool]:
        """Прочитать ключ; вернуть (значение, признак повреждения)"""
        try:
            value = self.store.get(key, default)
        except StorageError as e:
            logger.error(f"Storage read failed: {e}")
            self.store.quarantine(key)
            return default, True

        if not isinstance(value, expected_type):
            logger.error(f"Stored {key} has unexpected type {type(value).__name__}")
            self.store.quarantine(key)
            return default, True

        return value, False

    def _restore_latest_backup(self) -> Optional[Dict[str, Any]]:
        """Найти последнюю читаемую резервную копию"""
        for backup in self.backup_manager.list_backups():
            try:
                snapshot = self.backup_manager.read_backup(Path(backup['path']))
                habits, completions = validate_snapshot(snapshot)
            except (StorageError, ValidationError) as e:
                logger.warning(f"Failed to restore from backup {backup['name']}: {e}")
                continue
            logger.info(f"Successfully restored from backup: {backup['name']}")
            return {HABITS_KEY: habits, COMPLETIONS_KEY: completions}
        return None

    def load(self) -> Dict[str, Any]:
        """Загрузить привычки и журнал выполнений"""
        self.seeded = False
        self.restored = False
        first_run = not self.store.exists(HABITS_KEY) and not self.store.exists(COMPLETIONS_KEY)

        habits, habits_corrupt = self._read(HABITS_KEY, list, [])
        completions, completions_corrupt = self._read(COMPLETIONS_KEY, dict, {})

        if habits_corrupt or completions_corrupt:
            logger.warning("Attempting to recover from storage corruption...")
            restored = self._restore_latest_backup()
            if restored is not None:
                self.restored = True
                return restored
            logger.warning("Could not restore from any backup, starting with defaults")

        if first_run and self.seed_sample_habits:
            logger.info("No stored data found, seeding sample habits")
            habits = sample_habits()
            self.seeded = True

        logger.info(f"Loaded {len(habits)} habits and {len(completions)} completion days")
        return {HABITS_KEY: habits, COMPLETIONS_KEY: completions}

    def save(self, habits: List[Dict[str, Any]], completions: Dict[str, Dict[str, bool]]) -> None:
        """Записать оба значения (write-through)"""
        self.store.set(HABITS_KEY, habits)
        self.store.set(COMPLETIONS_KEY, completions)
        logger.debug(f"Saved {len(habits)} habits")

    def backup(self, reason: str) -> Optional[Path]:
        """Резервная копия текущих сохранённых данных перед разрушающей операцией"""
        if not self.auto_backup:
            return None
        if not self.store.exists(HABITS_KEY) and not self.store.exists(COMPLETIONS_KEY):
            return None
        try:
            snapshot = {
                HABITS_KEY: self.store.get(HABITS_KEY, []),
                COMPLETIONS_KEY: self.store.get(COMPLETIONS_KEY, {})
            }
        except StorageError as e:
            logger.warning(f"Skipping backup, stored data unreadable: {e}")
            return None
        return self.backup_manager.create_backup(snapshot, reason)

    def import_snapshot(self, data: Any) -> None:
        """Принять снимок целиком; при ошибке формата хранилище не меняется"""
        habits, completions = validate_snapshot(data)
        self.backup("import")
        self.save(habits, completions)
        logger.info(f"Imported snapshot with {len(habits)} habits")

    def clear(self) -> None:
        """Удалить все сохранённые данные"""
        self.backup("clear")
        self.store.remove(HABITS_KEY)
        self.store.remove(COMPLETIONS_KEY)
        logger.info("All stored habit data cleared")

    # ===== PREFERENCES =====

    def load_preferences(self) -> Dict[str, Any]:
        stored, _ = self._read(PREFERENCES_KEY, dict, {})
        preferences = dict(DEFAULT_PREFERENCES)
        preferences.update({k: v for k, v in stored.items() if k in DEFAULT_PREFERENCES})
        return preferences

    def save_preferences(self, preferences: Dict[str, Any]) -> None:
        self.store.set(PREFERENCES_KEY, preferences)
