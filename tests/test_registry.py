import pytest

from habitflow.core.models import Habit, ValidationError
from habitflow.core.registry import HabitRegistry

from .conftest import REF_DAY

def test_add_assigns_unique_increasing_ids(registry):
    first = registry.add({"name": "Read"})
    second = registry.add({"name": "Read"})
    assert first.id != second.id
    assert second.id > first.id
    assert [h.name for h in registry.list()] == ["Read", "Read"]

def test_add_sets_defaults_and_created_at(registry):
    habit = registry.add({"name": "  Stretch  ", "category": "fitness", "targetDays": 5})
    assert habit.name == "Stretch"
    assert habit.category == "fitness"
    assert habit.target_days == 5
    assert habit.color == "bg-blue-500"
    assert habit.created_at

def test_ids_never_reuse_loaded_ids(completion_log):
    far_future_id = 10 ** 15
    registry = HabitRegistry(completion_log, [Habit(id=far_future_id, name="Old")])
    habit = registry.add({"name": "New"})
    assert habit.id == far_future_id + 1

@pytest.mark.parametrize("draft", [
    {},
    {"name": "   "},
    {"name": "Run", "category": "sleeping"},
    {"name": "Run", "targetDays": 0},
    {"name": "Run", "targetDays": 8},
    {"name": "Run", "color": "blue"},
])
def test_add_rejects_invalid_draft(registry, draft):
    with pytest.raises(ValidationError):
        registry.add(draft)
    assert len(registry) == 0

def test_update_merges_fields(registry):
    habit = registry.add({"name": "Read", "description": "Books"})
    created_at = habit.created_at

    assert registry.update(habit.id, {"description": "Papers", "id": 1, "createdAt": "x"}) is True

    updated = registry.get(habit.id)
    assert updated.name == "Read"
    assert updated.description == "Papers"
    assert updated.id == habit.id
    assert updated.created_at == created_at

def test_update_and_delete_missing_are_noops(registry):
    registry.add({"name": "Read"})
    assert registry.update(999, {"name": "X"}) is False
    assert registry.delete(999) is False
    assert len(registry) == 1

def test_delete_purges_completions(registry, completion_log):
    habit = registry.add({"name": "Read"})
    other = registry.add({"name": "Walk"})
    completion_log.toggle(habit.id, REF_DAY)
    completion_log.toggle(other.id, REF_DAY)

    assert registry.delete(habit.id) is True

    assert registry.get(habit.id) is None
    assert completion_log.completed_dates(habit.id) == set()
    assert completion_log.is_completed(other.id, REF_DAY)

def test_from_list_skips_bad_records(completion_log):
    records = [
        {"id": 1, "name": "A"},
        "garbage",
        {"name": "no id"},
        {"id": 1, "name": "duplicate"},
        {"id": 2, "name": "B", "targetDays": 3, "createdAt": "2024-01-01T00:00:00"},
    ]
    registry = HabitRegistry.from_list(records, completion_log)
    assert registry.ids() == [1, 2]
    assert registry.get(2).target_days == 3

def test_to_list_uses_storage_keys(registry):
    habit = registry.add({"name": "Read", "icon": "Book"})
    record = registry.to_list()[0]
    assert record["id"] == habit.id
    assert record["targetDays"] == 7
    assert record["icon"] == "Book"
    assert "createdAt" in record
