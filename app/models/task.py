"""Task model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, String, ForeignKey
from datetime import datetime
from typing import Literal, Optional

from app.models.base import new_id, utc_now

TASK_STATUSES = ("todo", "in_progress", "completed")
PRIORITIES = ("low", "medium", "high")

TaskStatus = Literal["todo", "in_progress", "completed"]
Priority = Literal["low", "medium", "high"]

DEFAULT_STATUS: TaskStatus = "todo"
DEFAULT_PRIORITY: Priority = "medium"


class Task(SQLModel, table=True):
    """Task entity owned by exactly one user."""

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(
        sa_column=Column(String, ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    )
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None)
    status: str = Field(default=DEFAULT_STATUS, max_length=20, index=True)  # todo, in_progress, completed
    priority: str = Field(default=DEFAULT_PRIORITY, max_length=20)  # low, medium, high
    deadline: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
