"""Main FastAPI application for the Task Board API."""
from fastapi import FastAPI

from app.db.init import init_db
from app.middleware.cors import add_cors_middleware
from app.middleware.errors import add_error_handlers
from app.routers import dashboard_router, tags_router, tasks_router, users_router
from app.utils.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="Task Board API",
    description="Personal task tracking with tags, a three-column board and activity trends",
    version="1.0.0",
)

add_cors_middleware(app)
add_error_handlers(app)


@app.on_event("startup")
async def startup_event():
    """Create database tables on startup."""
    init_db()
    logger.info("Application startup complete")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


app.include_router(users_router, prefix="/api")  # /api/me
app.include_router(tasks_router, prefix="/api")  # /api/tasks, /api/board
app.include_router(tags_router, prefix="/api")  # /api/tags
app.include_router(dashboard_router, prefix="/api")  # /api/dashboard/*


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
