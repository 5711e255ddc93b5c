"""Database engine and session configuration."""
from typing import Generator
from sqlmodel import create_engine, Session
from sqlalchemy import event
from sqlalchemy.engine import Engine

from app.config import DATABASE_URL, SQL_ECHO
from app.utils.logger import get_logger

logger = get_logger(__name__)


def create_db_engine(database_url: str = DATABASE_URL, echo: bool = SQL_ECHO) -> Engine:
    """Create an engine, wiring SQLite so cascades and savepoints behave."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    engine = create_engine(
        database_url, echo=echo, connect_args={"check_same_thread": False, "timeout": 30}
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        # Stop pysqlite from managing BEGIN itself; we emit it in on_begin
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        # Foreign keys are off by default in SQLite; ON DELETE CASCADE needs them
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(conn):
        # IMMEDIATE takes the write lock up front, so concurrent writers queue
        # and each one reads what the previous one committed
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


engine = create_db_engine()
logger.info("Database engine configured", backend=engine.dialect.name)


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session
