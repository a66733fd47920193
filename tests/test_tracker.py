import pytest

from habitflow.core.database import HabitStorage
from habitflow.core.models import NotFoundError, ValidationError
from habitflow.core.tracker import HabitTracker

from .conftest import REF_DAY, day

def reopen(storage):
    return HabitTracker(HabitStorage(
        storage.store.data_dir, storage.backup_manager.backup_dir, max_backups=3
    ))

def test_changes_survive_restart(tracker, storage):
    habit = tracker.add_habit({"name": "Meditate", "category": "wellness"})
    tracker.toggle_completion(habit.id, REF_DAY)
    tracker.update_habit(habit.id, {"name": "Meditate daily"})

    restored = reopen(storage)

    assert [h.name for h in restored.list_habits()] == ["Meditate daily"]
    assert restored.is_completed(habit.id, REF_DAY)
    assert restored.get_habit(habit.id).created_at == habit.created_at

def test_toggle_accepts_date_strings(tracker):
    habit = tracker.add_habit({"name": "Read"})
    assert tracker.toggle_completion(habit.id, "2024-01-10") is True
    assert tracker.is_completed(habit.id, REF_DAY)
    assert tracker.toggle_completion(habit.id, REF_DAY) is False

def test_invalid_date_string(tracker):
    habit = tracker.add_habit({"name": "Read"})
    with pytest.raises(ValidationError):
        tracker.toggle_completion(habit.id, "10/01/2024")

def test_delete_purges_completions(tracker, storage):
    habit = tracker.add_habit({"name": "Read"})
    tracker.toggle_completion(habit.id, day(-1))
    tracker.toggle_completion(habit.id, REF_DAY)

    tracker.delete_habit(habit.id)

    assert tracker.list_habits() == []
    assert tracker.snapshot()["completions"] == {}
    assert storage.load()["completions"] == {}

def test_missing_habit_raises_not_found(tracker):
    with pytest.raises(NotFoundError):
        tracker.get_habit(42)
    with pytest.raises(NotFoundError):
        tracker.update_habit(42, {"name": "x"})
    with pytest.raises(NotFoundError):
        tracker.delete_habit(42)
    with pytest.raises(NotFoundError):
        tracker.toggle_completion(42, REF_DAY)
    with pytest.raises(NotFoundError):
        tracker.habit_summary(42, REF_DAY)

def test_invalid_update_keeps_habit(tracker):
    habit = tracker.add_habit({"name": "Read"})
    with pytest.raises(ValidationError):
        tracker.update_habit(habit.id, {"targetDays": 9})
    assert tracker.get_habit(habit.id).target_days == 7

def test_rejected_import_keeps_state(tracker):
    habit = tracker.add_habit({"name": "Read"})
    tracker.toggle_completion(habit.id, REF_DAY)
    before = tracker.snapshot()

    with pytest.raises(ValidationError):
        tracker.import_snapshot({"habits": []})

    assert tracker.snapshot() == before

def test_import_reconciles_orphaned_entries(tracker, storage):
    tracker.add_habit({"name": "Old"})
    payload = {
        "habits": [{"id": 7, "name": "Walk", "category": "fitness"}],
        "completions": {
            "2024-01-09": {"7": True, "99": True},
            "2024-01-10": {"99": True},
        },
    }

    result = tracker.import_snapshot(payload)

    assert result == {"habits": 1, "orphanedEntriesRemoved": 2}
    assert [h.id for h in tracker.list_habits()] == [7]
    assert tracker.snapshot()["completions"] == {"2024-01-09": {"7": True}}
    assert reopen(storage).snapshot() == tracker.snapshot()

def test_export_then_import_restores_state(tracker):
    habit = tracker.add_habit({"name": "Read", "category": "learning"})
    tracker.toggle_completion(habit.id, REF_DAY)
    exported = tracker.export_snapshot()
    assert "exportDate" in exported

    tracker.clear_all_data()
    assert tracker.list_habits() == []

    tracker.import_snapshot(exported)
    assert tracker.get_habit(habit.id).name == "Read"
    assert tracker.streak(habit.id, REF_DAY) == 1

def test_clear_all_data(tracker, storage):
    tracker.add_habit({"name": "Read"})
    tracker.clear_all_data()
    assert tracker.list_habits() == []
    assert reopen(storage).list_habits() == []

def test_unwritable_storage_keeps_working_in_memory(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    tracker = HabitTracker(HabitStorage(blocker, tmp_path / "backups"))

    habit = tracker.add_habit({"name": "Read"})
    tracker.toggle_completion(habit.id, REF_DAY)

    assert tracker.storage_available is False
    assert tracker.is_completed(habit.id, REF_DAY)
    assert tracker.streak(habit.id, REF_DAY) == 1

def test_seeded_habits_are_persisted(data_dir, tmp_path):
    tracker = HabitTracker(HabitStorage(data_dir, tmp_path / "backups", seed_sample_habits=True))
    assert len(tracker.list_habits()) == 3
    assert (data_dir / "habits.json").exists()

def test_statistics_follow_week_start(storage):
    tracker = HabitTracker(storage, week_start="monday")
    habit = tracker.add_habit({"name": "Read"})
    for offset in (-4, -3, -2, 0):
        tracker.toggle_completion(habit.id, day(offset))
    assert tracker.weekly_progress(habit.id, REF_DAY).completed_count == 2
    assert tracker.total_completions(habit.id) == 4
    assert tracker.best_streak(REF_DAY) == 1
    assert len(tracker.daily_series(7, REF_DAY)) == 7
    assert tracker.overview(REF_DAY).total_habits == 1

def test_restored_backup_survives_further_restarts(tracker, storage):
    habit = tracker.add_habit({"name": "Keep me"})
    tracker.toggle_completion(habit.id, REF_DAY)
    tracker.import_snapshot(tracker.export_snapshot())
    (storage.store.data_dir / "habits.json").write_text("{broken", encoding="utf-8")

    first = reopen(storage)
    second = reopen(storage)

    assert [h.name for h in first.list_habits()] == ["Keep me"]
    assert [h.name for h in second.list_habits()] == ["Keep me"]
    assert second.is_completed(habit.id, REF_DAY)
