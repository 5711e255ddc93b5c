"""Shared helpers for table models."""
from datetime import datetime, timezone
from typing import Optional
import uuid


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    """Aware UTC view of a timestamp. SQLite hands stored values back naive, and they are UTC."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())
