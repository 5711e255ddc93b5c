# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.config import BETTER_AUTH_SECRET, JWT_ALGORITHM
from app.db.config import create_db_engine, get_session
from app.db.init import init_db
from app.main import app
from app.services.task_service import TaskService
from app.services.user_service import ensure_user

USER_A = "user-a"
USER_B = "user-b"


def make_token(user_id: str, email: str | None = None, expires_in: timedelta = timedelta(hours=1)) -> str:
    payload = {"sub": user_id, "exp": datetime.now(timezone.utc) + expires_in}
    if email:
        payload["email"] = email
    return jwt.encode(payload, BETTER_AUTH_SECRET, algorithm=JWT_ALGORITHM)


@pytest.fixture()
def engine(tmp_path: Path) -> Iterator[Engine]:
    """Fresh SQLite file database per test, wired like production."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'taskboard.sqlite3'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        ensure_user(session, USER_A, "a@example.com")
        ensure_user(session, USER_B, "b@example.com")
        yield session


@pytest.fixture()
def service(session: Session) -> TaskService:
    return TaskService(session)


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    """
    API client bound to the per-test database.

    Used without the context manager so the startup hook does not touch the
    configured DATABASE_URL.
    """

    def override_get_session() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers() -> Callable[[str], Dict[str, str]]:
    def build(user_id: str = USER_A) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id, f'{user_id}@example.com')}"}

    return build
