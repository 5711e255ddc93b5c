"""Task router: CRUD, board moves and the board view."""
from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from app.schemas.task import (
    BoardResponse,
    MoveResult,
    TaskCreate,
    TaskEnvelope,
    TaskListResponse,
    TaskMove,
    TaskUpdate,
)
from app.services.task_service import TaskService
from app.middleware.auth import require_user_id
from app.db.config import get_session
from sqlmodel import Session

router = APIRouter(tags=["Tasks"])  # No prefix since main.py adds /api prefix


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session)


@router.get("/tasks", response_model=TaskListResponse)
async def list_tasks(
    user_id: str = Depends(require_user_id),
    service: TaskService = Depends(get_task_service),
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status: todo, in_progress, completed"),
    priority: Optional[str] = Query(None, description="Filter by priority: low, medium, high"),
    tag: Optional[str] = Query(None, description="Filter by tag name"),
):
    """List the authenticated user's tasks with their tags."""
    return {"tasks": service.list(user_id, status=status_filter, priority=priority, tag=tag)}


@router.post("/tasks", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    user_id: str = Depends(require_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Create a task; unknown tag names become new tags."""
    task = service.create(
        user_id=user_id,
        title=task_data.title,
        description=task_data.description,
        status=task_data.status,
        priority=task_data.priority,
        deadline=task_data.deadline,
        tag_names=task_data.tags,
    )
    return {"task": task}


@router.get("/tasks/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: str,
    user_id: str = Depends(require_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID."""
    return {"task": service.get(user_id, task_id)}


@router.patch("/tasks/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    user_id: str = Depends(require_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Partially update a task. Sending ``tags`` replaces the whole tag set."""
    changes = task_data.model_dump(exclude_unset=True)
    if "tags" in changes:
        changes["tag_names"] = changes.pop("tags")
    return {"task": service.update(user_id, task_id, changes)}


@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: str,
    user_id: str = Depends(require_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task and its tag links."""
    service.delete(user_id, task_id)
    return {"message": "Task deleted successfully"}


@router.post("/tasks/{task_id}/move", response_model=MoveResult)
async def move_task(
    task_id: str,
    move: TaskMove,
    user_id: str = Depends(require_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Drop a task over a column or another card on the board."""
    return service.move(user_id, task_id, move.over_id)


@router.get("/board", response_model=BoardResponse)
async def get_board(
    user_id: str = Depends(require_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Tasks grouped into the todo, in_progress and completed columns."""
    return {"columns": service.board(user_id)}
