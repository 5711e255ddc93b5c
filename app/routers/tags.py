"""Tag router."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.db.config import get_session
from app.middleware.auth import require_user_id
from app.schemas.task import TagListResponse
from app.services.tag_resolver import TagResolver

router = APIRouter(tags=["Tags"])


@router.get("/tags", response_model=TagListResponse)
async def list_tags(
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    """List every tag the user has created, used or not."""
    return {"tags": TagResolver(session).list_tags(user_id)}
