import pytest

from habitflow.config import HabitFlowConfig, WeekStart, Environment
from habitflow.dashboard.config import DashboardSettings

def test_defaults(app_config):
    assert app_config.environment == Environment.TESTING
    assert app_config.tracker.timezone == "UTC"
    assert app_config.tracker.week_start == WeekStart.SUNDAY
    assert app_config.tracker.seed_sample_habits is False
    assert app_config.storage.max_backups == 10
    assert app_config.to_dict()["week_start"] == "sunday"

def test_week_start_monday(app_config, monkeypatch):
    monkeypatch.setenv("WEEK_START", "Monday")
    assert HabitFlowConfig().tracker.week_start == WeekStart.MONDAY

@pytest.mark.parametrize("key, value", [
    ("TIMEZONE", "Mars/Olympus"),
    ("STATS_WINDOW_DAYS", "0"),
    ("MAX_BACKUPS", "-1"),
    ("PORT", "80"),
])
def test_invalid_values_rejected(app_config, monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        HabitFlowConfig()

def test_ensure_directories(app_config):
    app_config.ensure_directories()
    assert app_config.data_dir.is_dir()
    assert app_config.backup_dir.is_dir()
    assert not app_config.log_dir.exists()

def test_logging_config_with_file(app_config, monkeypatch):
    monkeypatch.setenv("LOG_TO_FILE", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    logging_config = HabitFlowConfig().get_logging_config()

    assert logging_config["loggers"][""]["handlers"] == ["console", "file"]
    assert logging_config["handlers"]["file"]["filename"].endswith("habitflow_testing.log")
    assert logging_config["handlers"]["console"]["level"] == "DEBUG"

def test_dashboard_settings_from_env(monkeypatch):
    monkeypatch.setenv("DASHBOARD_MAX_CHART_DAYS", "14")
    assert DashboardSettings().MAX_CHART_DAYS == 14
    monkeypatch.setenv("DASHBOARD_MAX_CHART_DAYS", "0")
    with pytest.raises(ValueError):
        DashboardSettings()

def test_stats_window(app_config, monkeypatch):
    monkeypatch.setenv("STATS_WINDOW_DAYS", "7")
    assert HabitFlowConfig().tracker.stats_window_days == 7
