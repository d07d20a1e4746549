"""Unit tests for core/results.py"""

import logging

import pytest

from betapad.core.models import ClassifiedRow, RowKind
from betapad.core.results import ResultTracker, toggle_result
from betapad.crud.models import ResultEnum


ROWS = [
    ClassifiedRow(step="1", indent=0, text="Group", kind=RowKind.category),
    ClassifiedRow(step="2", indent=1, text="Do X", kind=RowKind.step),
    ClassifiedRow(step="3", indent=1, text="// note", kind=RowKind.comment),
    ClassifiedRow(step="4", indent=1, text="Do Y", kind=RowKind.step),
]


# --- toggle_result ---

def test_toggle_sets_value():
    results, value = toggle_result({}, 1, ResultEnum.passed)
    assert value == ResultEnum.passed
    assert results == {1: ResultEnum.passed}


def test_toggle_same_value_clears():
    """Choosing the current value again removes it."""
    results, value = toggle_result({1: ResultEnum.passed}, 1, "pass")
    assert value is None
    assert results == {}


def test_toggle_other_value_replaces():
    results, value = toggle_result({1: ResultEnum.passed}, 1, ResultEnum.fail)
    assert value == ResultEnum.fail
    assert results == {1: ResultEnum.fail}


def test_toggle_does_not_mutate_input():
    original = {1: ResultEnum.blocked}
    toggle_result(original, 1, ResultEnum.blocked)
    assert original == {1: ResultEnum.blocked}


def test_toggle_invalid_value():
    with pytest.raises(ValueError):
        toggle_result({}, 0, "skipped")


# --- ResultTracker ---

def test_tracker_persists_each_toggle():
    calls = []
    tracker = ResultTracker(ROWS, persist=lambda i, v: calls.append((i, v)))
    tracker.toggle(1, ResultEnum.passed)
    tracker.toggle(1, ResultEnum.passed)
    tracker.toggle(3, ResultEnum.blocked)
    assert calls == [(1, ResultEnum.passed), (1, None), (3, ResultEnum.blocked)]
    assert tracker.results == {3: ResultEnum.blocked}


def test_tracker_rejects_non_step_rows():
    tracker = ResultTracker(ROWS, persist=lambda i, v: None)
    with pytest.raises(ValueError, match="not a gradeable step"):
        tracker.toggle(0, ResultEnum.passed)
    with pytest.raises(ValueError):
        tracker.toggle(2, ResultEnum.passed)
    with pytest.raises(ValueError):
        tracker.toggle(99, ResultEnum.passed)


def test_tracker_keeps_local_state_on_persist_failure(caplog):
    """A failing persist is logged; the optimistic update stays."""
    def persist(index, value):
        raise ConnectionError("store unavailable")

    tracker = ResultTracker(ROWS, persist=persist)
    with caplog.at_level(logging.WARNING):
        value = tracker.toggle(1, ResultEnum.fail)
    assert value == ResultEnum.fail
    assert tracker.get(1) == ResultEnum.fail
    assert "Failed to save result for step 1" in caplog.text


def test_tracker_initial_results_filtered_to_steps():
    """Stored results for rows that are no longer steps are ignored."""
    tracker = ResultTracker(ROWS, persist=lambda i, v: None, initial={0: "pass", 1: "fail", 7: "pass"})
    assert tracker.results == {1: ResultEnum.fail}


def test_tracker_summary():
    tracker = ResultTracker(ROWS, persist=lambda i, v: None, initial={1: ResultEnum.passed})
    assert tracker.summary() == {"pass": 1, "fail": 0, "blocked": 0, "untested": 1}
