"""
Error taxonomy for the task/tag engine.

Every service operation reports failure by raising one of these. The HTTP
layer maps them onto status codes in ``app.middleware.errors``.
"""

from typing import Any, Dict, Optional


class TaskBoardError(Exception):
    """Base exception carrying a machine-readable code."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(TaskBoardError):
    """Empty or malformed input, rejected before any write."""

    code = "VALIDATION_ERROR"


class NotFoundError(TaskBoardError):
    """Referenced record is absent or owned by another user.

    Both cases raise the same error so existence never leaks across users.
    """

    code = "NOT_FOUND"

    def __init__(self, message: str = "Task not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ConflictRetry(TaskBoardError):
    """A concurrent writer created the same tag first. Never leaves the resolver."""

    code = "CONFLICT_RETRY"


class StorageFailure(TaskBoardError):
    """Storage is unavailable or rejected the write; the operation was rolled back."""

    code = "STORAGE_FAILURE"
