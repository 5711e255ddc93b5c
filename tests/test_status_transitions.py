# tests/test_status_transitions.py

from __future__ import annotations

import pytest

from app.services.status_transitions import evaluate_drop, is_noop

STATUSES = {"t1": "todo", "t2": "in_progress", "t3": "completed"}


@pytest.mark.parametrize("column", ["todo", "in_progress", "completed"])
def test_drop_on_column_takes_column_status(column: str) -> None:
    assert evaluate_drop(column, STATUSES) == column
    assert evaluate_drop(column, {}) == column


def test_drop_on_card_adopts_card_status() -> None:
    assert evaluate_drop("t3", STATUSES) == "completed"
    assert evaluate_drop("t2", STATUSES) == "in_progress"


def test_drop_on_unknown_target_is_no_transition() -> None:
    assert evaluate_drop("missing", STATUSES) is None
    assert is_noop("todo", None)


def test_drop_on_itself_or_same_column_is_noop() -> None:
    # t1 dropped on itself
    assert is_noop(STATUSES["t1"], evaluate_drop("t1", STATUSES))
    # t2 dropped on its own column header
    assert is_noop(STATUSES["t2"], evaluate_drop("in_progress", STATUSES))


def test_cross_column_drop_is_not_noop() -> None:
    assert not is_noop("todo", evaluate_drop("t3", STATUSES))
