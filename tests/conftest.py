"""
Общие фикстуры тестов HabitFlow.

Опорная дата REF_DAY: среда 2024-01-10. Неделя с воскресенья: 07.01–13.01,
неделя с понедельника: 08.01–14.01.
"""

from datetime import date, timedelta

import pytest

from habitflow.config import HabitFlowConfig
from habitflow.core.completions import CompletionLog
from habitflow.core.registry import HabitRegistry
from habitflow.core.statistics import StatisticsCalculator
from habitflow.core.database import HabitStorage
from habitflow.core.tracker import HabitTracker

REF_DAY = date(2024, 1, 10)

def day(offset: int) -> date:
    """Дата относительно REF_DAY"""
    return REF_DAY + timedelta(days=offset)

@pytest.fixture
def completion_log():
    return CompletionLog()

@pytest.fixture
def registry(completion_log):
    return HabitRegistry(completion_log)

@pytest.fixture
def calculator(registry, completion_log):
    return StatisticsCalculator(registry, completion_log, week_start="sunday")

@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"

@pytest.fixture
def storage(data_dir, tmp_path):
    return HabitStorage(data_dir=data_dir, backup_dir=tmp_path / "backups", max_backups=3)

@pytest.fixture
def tracker(storage):
    return HabitTracker(storage)

@pytest.fixture
def app_config(tmp_path, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("BACKUP_DIR", str(tmp_path / "backups"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("SEED_SAMPLE_HABITS", "false")
    return HabitFlowConfig()
