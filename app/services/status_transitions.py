"""
Board drop evaluation.

A card dragged on the board lands either on a column (its id is a status) or
on another card (its id is a task id). These helpers work out the resulting
status without touching storage.
"""

from typing import Mapping, Optional

from app.models.task import TASK_STATUSES, TaskStatus


def evaluate_drop(dropped_over_id: str, known_task_statuses: Mapping[str, str]) -> Optional[TaskStatus]:
    """
    Status a dragged task should take after being dropped.

    Args:
        dropped_over_id: Id of the drop target, a column status or a task id
        known_task_statuses: Current status of each visible task, by task id

    Returns:
        The target status, or None when the target is unknown (no transition)
    """
    if dropped_over_id in TASK_STATUSES:
        return dropped_over_id
    return known_task_statuses.get(dropped_over_id)


def is_noop(current_status: str, target_status: Optional[str]) -> bool:
    """True when applying the drop would not change anything."""
    return target_status is None or target_status == current_status
