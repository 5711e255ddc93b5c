"""Translate service errors into HTTP responses."""
from typing import Any, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.services.errors import NotFoundError, StorageFailure, TaskBoardError, ValidationError

STATUS_CODES = {
    ValidationError: 422,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_error_response(error: TaskBoardError) -> Dict[str, Any]:
    """
    Create a standardized error response

    Args:
        error: The service error to convert

    Returns:
        Standardized error response dictionary
    """
    return {
        "success": False,
        "error": {
            "code": error.code,
            "message": error.message,
            "details": error.details,
        },
    }


async def handle_taskboard_error(request: Request, exc: TaskBoardError) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content=create_error_response(exc))


def add_error_handlers(app):
    """Register service error handlers on the FastAPI application."""
    app.add_exception_handler(TaskBoardError, handle_taskboard_error)
