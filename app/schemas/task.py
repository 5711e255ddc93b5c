"""Task and tag schemas for the Task Board API."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Dict, List, Optional

from app.models.base import as_utc
from app.models.task import Priority, TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating a task."""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None)
    status: Optional[TaskStatus] = Field(None)  # defaults to todo
    priority: Optional[Priority] = Field(None)  # defaults to medium
    deadline: Optional[str] = Field(None)  # ISO datetime string
    tags: Optional[List[str]] = Field(None)  # tag names, created on first use


class TaskUpdate(BaseModel):
    """Schema for partially updating a task. Omitted fields stay untouched."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None)
    status: Optional[TaskStatus] = Field(None)
    priority: Optional[Priority] = Field(None)
    deadline: Optional[str] = Field(None)  # ISO datetime string, null clears it
    tags: Optional[List[str]] = Field(None)  # replaces the whole tag set, [] removes all


class TaskMove(BaseModel):
    """Board drop: the id of the column or card the task was dropped over."""
    over_id: str = Field(..., min_length=1)


class TagResponse(BaseModel):
    """Schema for tag API responses."""
    id: str
    name: str
    color: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class TaskResponse(BaseModel):
    """Schema for task API responses, tags resolved to tag objects."""
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: Priority
    deadline: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    tags: List[TagResponse] = []

    @field_validator("deadline", "created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class TaskEnvelope(BaseModel):
    task: TaskResponse


class TaskListResponse(BaseModel):
    tasks: List[TaskResponse]


class TagListResponse(BaseModel):
    tags: List[TagResponse]


class MoveResult(BaseModel):
    """Outcome of a board drop; ``changed`` is false when no write happened."""
    task: TaskResponse
    changed: bool


class BoardResponse(BaseModel):
    """Tasks grouped into the three board columns."""
    columns: Dict[TaskStatus, List[TaskResponse]]
