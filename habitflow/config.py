#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
"""

import os
import sys
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class WeekStart(Enum):
    """Первый день календарной недели"""
    SUNDAY = "sunday"
    MONDAY = "monday"

@dataclass
class StorageConfig:
    """Конфигурация хранилища"""
    data_dir: Path
    backup_dir: Path
    max_backups: int = 10
    auto_backup: bool = True

@dataclass
class TrackerConfig:
    """Конфигурация трекера привычек"""
    timezone: str = "UTC"
    week_start: WeekStart = WeekStart.SUNDAY
    stats_window_days: int = 30
    seed_sample_habits: bool = True

@dataclass
class ServerConfig:
    """Конфигурация сервера дашборда"""
    host: str = "127.0.0.1"
    port: int = 8000
    debug_mode: bool = False

def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'

class HabitFlowConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.export_dir = Path(os.getenv('EXPORT_DIR', 'exports'))
        self.backup_dir = Path(os.getenv('BACKUP_DIR', 'backups'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            data_dir=self.data_dir,
            backup_dir=self.backup_dir,
            max_backups=int(os.getenv('MAX_BACKUPS', 10)),
            auto_backup=_env_bool('AUTO_BACKUP', 'true')
        )

        # Трекер
        self.tracker = TrackerConfig(
            timezone=os.getenv('TIMEZONE', 'UTC'),
            week_start=WeekStart(os.getenv('WEEK_START', 'sunday').lower()),
            stats_window_days=int(os.getenv('STATS_WINDOW_DAYS', 30)),
            seed_sample_habits=_env_bool('SEED_SAMPLE_HABITS', 'true')
        )

        # Сервер
        self.server = ServerConfig(
            host=os.getenv('HOST', '127.0.0.1'),
            port=int(os.getenv('PORT', 8000)),
            debug_mode=_env_bool('DEBUG_MODE', 'false')
        )

        # Логирование
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = _env_bool('LOG_TO_FILE', 'false')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if self.tracker.timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестная временная зона: {self.tracker.timezone}")

        if self.tracker.stats_window_days < 1:
            errors.append("STATS_WINDOW_DAYS должен быть положительным числом")

        if self.storage.max_backups < 0:
            errors.append("MAX_BACKUPS не может быть отрицательным")

        if not 1024 <= self.server.port <= 65535:
            errors.append(f"Порт {self.server.port} вне допустимого диапазона (1024-65535)")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [
            self.data_dir,
            self.export_dir,
            self.backup_dir,
        ]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования для dictConfig"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        config: Dict[str, Any] = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'uvicorn.access': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"habitflow_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'data_dir': str(self.data_dir),
            'timezone': self.tracker.timezone,
            'week_start': self.tracker.week_start.value,
            'stats_window_days': self.tracker.stats_window_days,
            'server': {
                'host': self.server.host,
                'port': self.server.port,
                'debug_mode': self.server.debug_mode
            },
            'log_level': self.log_level.value
        }

# Глобальный экземпляр конфигурации
config = HabitFlowConfig()

__all__ = [
    'config',
    'HabitFlowConfig',
    'Environment',
    'LogLevel',
    'WeekStart',
    'StorageConfig',
    'TrackerConfig',
    'ServerConfig'
]
