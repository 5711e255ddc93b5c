"""Initialize database tables."""
from sqlmodel import SQLModel
from sqlalchemy.engine import Engine

# Imported for their side effect of registering tables on SQLModel.metadata
from app.models.user import User  # noqa: F401
from app.models.task import Task  # noqa: F401
from app.models.tag import Tag, TaskTag  # noqa: F401
from app.utils.logger import get_logger

logger = get_logger(__name__)


def init_db(engine: Engine | None = None) -> None:
    """Create all tables in the database."""
    if engine is None:
        from app.db.config import engine

    logger.info("Creating all tables", backend=engine.dialect.name)
    SQLModel.metadata.create_all(engine)


if __name__ == "__main__":
    init_db()
    print("Database tables created successfully.")
