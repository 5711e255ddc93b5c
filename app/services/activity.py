"""
Activity aggregation for the dashboard.

Tasks are bucketed by the UTC day they were created on. A task's current
status counts toward its creation day only: a task created on Monday and
completed on Friday shows up as completed in Monday's bucket.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from app.config import ACTIVITY_WINDOW_DAYS, ACTIVITY_WINDOWS
from app.models.base import as_utc
from app.schemas.dashboard import ActivityBucket, TaskSummary
from app.services.errors import ValidationError


def creation_day(created_at: datetime) -> str:
    """UTC calendar day of a timestamp as ``YYYY-MM-DD``."""
    return as_utc(created_at).date().isoformat()


def bucket_by_creation_day(tasks: Iterable) -> List[ActivityBucket]:
    """Count tasks per creation day, sorted ascending by date."""
    buckets: Dict[str, ActivityBucket] = {}
    for task in tasks:
        day = creation_day(task.created_at)
        bucket = buckets.setdefault(day, ActivityBucket(date=day))
        bucket.total += 1
        if task.status == "in_progress":
            bucket.active += 1
        elif task.status == "completed":
            bucket.completed += 1
    return [buckets[day] for day in sorted(buckets)]


def aggregate(
    tasks: Iterable,
    window_days: int = ACTIVITY_WINDOW_DAYS,
    now: Optional[datetime] = None,
) -> List[ActivityBucket]:
    """
    Activity buckets for the trailing window ending at ``now``.

    A bucket is kept when its day, taken at UTC midnight, is on or after
    ``now - window_days``.

    Args:
        tasks: Objects with ``created_at`` and ``status``
        window_days: One of 7, 30 or 90
        now: Reference time, defaults to the current time

    Raises:
        ValidationError: If the window is not one of the supported ones
    """
    if window_days not in ACTIVITY_WINDOWS:
        raise ValidationError(
            f"window_days must be one of: {', '.join(str(w) for w in ACTIVITY_WINDOWS)}",
            {"field": "window_days", "value": window_days},
        )

    reference = as_utc(now) if now is not None else datetime.now(timezone.utc)
    start = reference - timedelta(days=window_days)

    return [
        bucket
        for bucket in bucket_by_creation_day(tasks)
        if datetime.fromisoformat(bucket.date).replace(tzinfo=timezone.utc) >= start
    ]


def summarize(tasks: Iterable) -> TaskSummary:
    """Totals per status and the completion rate, for the summary cards."""
    counts = {"todo": 0, "in_progress": 0, "completed": 0}
    total = 0
    for task in tasks:
        total += 1
        if task.status in counts:
            counts[task.status] += 1

    rate = round(counts["completed"] / total * 100, 1) if total else 0.0
    return TaskSummary(
        total=total,
        pending=counts["todo"],
        active=counts["in_progress"],
        completed=counts["completed"],
        completion_rate=rate,
    )
