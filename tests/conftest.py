"""Shared fixtures: a throwaway SQLite database and seeded users."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "PUSH_GATEWAY_URL", "PUSH_GATEWAY_TOKEN"):
    os.environ.pop(_name, None)

from alnet.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from alnet.domain.entities import User  # noqa: E402
from alnet.infrastructure import models  # noqa: E402,F401
from alnet.infrastructure.database import Base, SessionLocal, engine  # noqa: E402
from alnet.infrastructure.realtime import (  # noqa: E402
    message_connections,
    notification_connections,
)
from alnet.infrastructure.repositories import UserRepository  # noqa: E402
from alnet.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def setup_database():
    """Give every test empty tables and empty realtime registries."""

    Base.metadata.drop_all(bind=engine, checkfirst=True)
    Base.metadata.create_all(bind=engine)
    message_connections.reset()
    notification_connections.reset()
    yield
    message_connections.reset()
    notification_connections.reset()
    Base.metadata.drop_all(bind=engine, checkfirst=True)


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db):
    """Factory creating users with unique email addresses."""

    counter = {"value": 0}

    def _make_user(name: str | None = None, **overrides) -> User:
        counter["value"] += 1
        index = counter["value"]
        user = User(
            id=None,
            name=name or f"User {index}",
            email=overrides.pop("email", f"user{index}@example.com"),
            **overrides,
        )
        return UserRepository(db).create(user)

    return _make_user


@pytest.fixture()
def alice(make_user) -> User:
    return make_user("Alice", email="alice@example.com")


@pytest.fixture()
def bob(make_user) -> User:
    return make_user("Bob", email="bob@example.com")


@pytest.fixture()
def carol(make_user) -> User:
    return make_user("Carol", email="carol@example.com")


def token_for(user: User) -> str:
    return create_access_token({"sub": str(user.id)})


@pytest.fixture()
def auth_headers():
    """Return a helper building bearer headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(user)}"}

    return _auth_headers


@pytest.fixture()
def ws_token():
    return token_for


@pytest.fixture()
def client():
    """Return a test client bound to a fresh application instance.

    The client is entered as a context manager so HTTP requests and every
    websocket session share one event loop.
    """

    from fastapi.testclient import TestClient

    from alnet.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()
