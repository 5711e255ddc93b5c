"""User model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from datetime import datetime

from app.models.base import utc_now


class User(SQLModel, table=True):
    """Owner identity issued by the auth provider; every task and tag hangs off it."""

    id: str = Field(primary_key=True, index=True)
    # Not unique: the auth provider owns identity, this is only a mirror of its claims
    email: str | None = Field(default=None, index=True, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    image: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
