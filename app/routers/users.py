"""Current-user router."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.db.config import get_session
from app.middleware.auth import require_user_id
from app.models.user import User

router = APIRouter(tags=["Users"])


@router.get("/me")
async def get_me(
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    """Return the authenticated user."""
    user = session.get(User, user_id)
    return {"user": user.model_dump()}
