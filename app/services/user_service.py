"""Local mirror of users issued by the auth provider."""
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.models.base import utc_now
from app.models.user import User
from app.utils.logger import get_logger

logger = get_logger(__name__)


def ensure_user(session: Session, user_id: str, email: Optional[str] = None, name: Optional[str] = None) -> User:
    """
    Return the user row for an authenticated identity, creating it on first sight.

    Tasks and tags reference ``user.id``, so the row has to exist before the
    first write on behalf of that user.
    """
    user = session.get(User, user_id)
    if user is not None:
        return user

    now = utc_now()
    user = User(id=user_id, email=email, name=name, created_at=now, updated_at=now)
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Another request registered the same user first
        session.rollback()
        user = session.get(User, user_id)
        if user is None:
            raise
        return user

    session.refresh(user)
    logger.info("Registered user from auth token", user_id=user_id)
    return user
