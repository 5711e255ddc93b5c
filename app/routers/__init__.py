"""Routers package for the Task Board API."""

from .dashboard import router as dashboard_router
from .tags import router as tags_router
from .tasks import router as tasks_router
from .users import router as users_router

__all__ = ["dashboard_router", "tags_router", "tasks_router", "users_router"]
