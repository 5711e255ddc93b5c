# tests/test_activity.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.services.activity import aggregate, bucket_by_creation_day, summarize
from app.services.errors import ValidationError


def _task(created_at: datetime, status: str) -> SimpleNamespace:
    return SimpleNamespace(created_at=created_at, status=status)


@pytest.fixture()
def tasks() -> list[SimpleNamespace]:
    # Deliberately out of order
    return [
        _task(datetime(2024, 1, 2, 9, 0), "in_progress"),
        _task(datetime(2024, 1, 1, 8, 0), "todo"),
        _task(datetime(2024, 1, 1, 23, 59), "completed"),
    ]


def test_buckets_by_creation_day_sorted(tasks: list[SimpleNamespace]) -> None:
    buckets = bucket_by_creation_day(tasks)

    assert [b.model_dump() for b in buckets] == [
        {"date": "2024-01-01", "total": 2, "active": 0, "completed": 1},
        {"date": "2024-01-02", "total": 1, "active": 1, "completed": 0},
    ]


def test_aggregate_window_covering_both_days(tasks: list[SimpleNamespace]) -> None:
    now = datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)
    buckets = aggregate(tasks, window_days=7, now=now)

    assert [b.date for b in buckets] == ["2024-01-01", "2024-01-02"]
    assert buckets[0].total == 2 and buckets[0].completed == 1
    assert buckets[1].active == 1


def test_aggregate_drops_days_before_window_start(tasks: list[SimpleNamespace]) -> None:
    # Window starts 2024-01-01 12:00, so that day's midnight falls outside
    now = datetime(2024, 1, 8, 12, 0, tzinfo=timezone.utc)
    buckets = aggregate(tasks, window_days=7, now=now)

    assert [b.date for b in buckets] == ["2024-01-02"]


def test_aggregate_rejects_unsupported_window(tasks: list[SimpleNamespace]) -> None:
    with pytest.raises(ValidationError):
        aggregate(tasks, window_days=14)


def test_aware_timestamps_bucket_by_utc_day() -> None:
    plus_five = timezone(timedelta(hours=5))
    # 2024-03-02 02:00 at UTC+5 is still 2024-03-01 in UTC
    buckets = bucket_by_creation_day([_task(datetime(2024, 3, 2, 2, 0, tzinfo=plus_five), "todo")])
    assert buckets[0].date == "2024-03-01"


def test_completion_counts_stay_on_creation_day() -> None:
    # Completed days later, but only ever counted on the day it was created
    buckets = bucket_by_creation_day([
        _task(datetime(2024, 1, 1), "completed"),
        _task(datetime(2024, 1, 6), "todo"),
    ])
    assert buckets[0].completed == 1
    assert buckets[1].completed == 0


def test_summarize(tasks: list[SimpleNamespace]) -> None:
    summary = summarize(tasks)

    assert summary.total == 3
    assert summary.pending == 1
    assert summary.active == 1
    assert summary.completed == 1
    assert summary.completion_rate == 33.3


def test_summarize_empty() -> None:
    summary = summarize([])
    assert summary.total == 0
    assert summary.completion_rate == 0.0
