"""Dashboard router: activity trend and summary cards."""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from app.config import ACTIVITY_WINDOW_DAYS
from app.db.config import get_session
from app.middleware.auth import require_user_id
from app.models.task import Task
from app.schemas.dashboard import ActivityResponse, TaskSummary
from app.services.activity import aggregate, summarize

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def _user_tasks(session: Session, user_id: str):
    return session.exec(select(Task).where(Task.user_id == user_id)).all()


@router.get("/activity", response_model=ActivityResponse)
async def get_activity(
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
    window_days: int = Query(ACTIVITY_WINDOW_DAYS, description="Trailing window: 7, 30 or 90 days"),
):
    """Tasks created per day within the window, with active and completed counts."""
    buckets = aggregate(_user_tasks(session, user_id), window_days=window_days)
    return {"window_days": window_days, "buckets": buckets}


@router.get("/summary", response_model=TaskSummary)
async def get_summary(
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    """Totals per status and the completion rate."""
    return summarize(_user_tasks(session, user_id))
