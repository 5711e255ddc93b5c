"""Tag and task-tag link models for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, String, ForeignKey, UniqueConstraint
from datetime import datetime

from app.models.base import new_id, utc_now


class Tag(SQLModel, table=True):
    """User-scoped label; a name is unique per user."""

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_tag_user_name"),)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(
        sa_column=Column(String, ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    )
    name: str = Field(min_length=1, max_length=50)
    color: str = Field(max_length=30)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class TaskTag(SQLModel, table=True):
    """Join row meaning "task has tag"."""

    __tablename__ = "task_tag"

    task_id: str = Field(
        sa_column=Column(String, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True)
    )
    tag_id: str = Field(
        sa_column=Column(String, ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True, index=True)
    )
