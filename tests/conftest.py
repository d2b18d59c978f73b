from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from taskboard.core.config import Settings  # noqa: E402
from taskboard.models import category, task, user  # noqa: F401,E402
from taskboard.models.task import Task  # noqa: E402
from taskboard.models.user import User  # noqa: E402
from taskboard.services.auth_service import AuthService  # noqa: E402

TEST_SECRET = "test-secret-key"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def settings() -> Settings:
    # bcrypt cost 4 keeps the suite fast
    return Settings(
        app_env="test",
        jwt_secret_key=TEST_SECRET,
        bcrypt_rounds=4,
        max_page_size=50,
    )


@pytest.fixture
def auth(settings) -> AuthService:
    return AuthService.from_settings(settings)


@pytest.fixture
def make_user(db):
    """Insert a user directly (no bcrypt) for tests that only need an owner."""
    counter = {"n": 0}

    def _make(username: str | None = None) -> User:
        counter["n"] += 1
        name = username or f"user{counter['n']}"
        u = User(username=name, email=f"{name}@example.com", password_hash="not-a-real-hash")
        db.add(u)
        db.commit()
        db.refresh(u)
        return u

    return _make


@pytest.fixture
def make_task(db):
    def _make(user_id: int, title: str = "task", **fields) -> Task:
        t = Task(user_id=user_id, title=title, **fields)
        db.add(t)
        db.commit()
        db.refresh(t)
        return t

    return _make


@pytest.fixture
def client(engine, settings):
    from fastapi.testclient import TestClient

    from taskboard.core.config import get_settings
    from taskboard.db.session import get_session
    from taskboard.main import app

    def _get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
