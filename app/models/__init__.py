"""Table models."""
from app.models.user import User
from app.models.task import Task
from app.models.tag import Tag, TaskTag

__all__ = ["User", "Task", "Tag", "TaskTag"]
