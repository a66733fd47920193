from datetime import date

import pytest

from habitflow.core.completions import CompletionLog
from habitflow.core.models import ValidationError

from .conftest import REF_DAY, day

def test_missing_entry_is_not_completed(completion_log):
    assert completion_log.is_completed(1, REF_DAY) is False

def test_toggle_returns_new_state(completion_log):
    assert completion_log.toggle(1, REF_DAY) is True
    assert completion_log.is_completed(1, REF_DAY) is True
    assert completion_log.toggle(1, REF_DAY) is False
    assert completion_log.is_completed(1, REF_DAY) is False

@pytest.mark.parametrize("initial", [None, True, False])
def test_double_toggle_restores_state(initial):
    entries = {} if initial is None else {"2024-01-10": {"1": initial}}
    log = CompletionLog(entries)
    before = log.is_completed(1, REF_DAY)
    log.toggle(1, REF_DAY)
    log.toggle(1, REF_DAY)
    assert log.is_completed(1, REF_DAY) == before

def test_explicit_false_equals_absent():
    log = CompletionLog({"2024-01-10": {"1": False}})
    assert log.is_completed(1, REF_DAY) is False
    assert log.completed_dates(1) == set()

def test_string_and_int_ids_are_the_same_key(completion_log):
    completion_log.toggle(42, "2024-01-10")
    assert completion_log.is_completed("42", date(2024, 1, 10))
    assert completion_log.to_dict() == {"2024-01-10": {"42": True}}

def test_purge_removes_all_entries_for_habit(completion_log):
    for offset in range(-3, 1):
        completion_log.toggle(1, day(offset))
    completion_log.toggle(2, REF_DAY)

    completion_log.purge(1)

    assert completion_log.completed_dates(1) == set()
    assert completion_log.to_dict() == {"2024-01-10": {"2": True}}
    assert completion_log.is_completed(2, REF_DAY)

def test_reconcile_drops_orphans():
    log = CompletionLog({
        "2024-01-09": {"1": True, "7": True},
        "2024-01-10": {"7": False},
    })
    removed = log.reconcile([1])
    assert removed == 2
    assert log.to_dict() == {"2024-01-09": {"1": True}}

def test_malformed_buckets_are_skipped():
    log = CompletionLog({"not-a-date": {"1": True}, "2024-01-10": "oops", "2024-01-09": {"1": True}})
    assert log.to_dict() == {"2024-01-09": {"1": True}}

def test_from_dict_rejects_non_mapping():
    with pytest.raises(ValidationError):
        CompletionLog.from_dict(["2024-01-10"])
