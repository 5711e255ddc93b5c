"""Dashboard schemas: activity trend and summary cards."""
from pydantic import BaseModel
from typing import List


class ActivityBucket(BaseModel):
    """Tasks created on one UTC day, split by their current status."""
    date: str  # YYYY-MM-DD
    total: int = 0
    active: int = 0
    completed: int = 0


class ActivityResponse(BaseModel):
    window_days: int
    buckets: List[ActivityBucket]


class TaskSummary(BaseModel):
    """Counts shown on the dashboard cards."""
    total: int
    pending: int
    active: int
    completed: int
    completion_rate: float  # percent, one decimal
