"""Shared fixtures: an isolated sqlite database and a configured API client."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="booknex-tests-")) / "test.db"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CLEANUP_INTERVAL_MINUTES"] = "0"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in ("SERVICE_ROLE_KEY", "VAPID_PUBLIC_KEY", "VAPID_PRIVATE_KEY"):
    os.environ.pop(_name, None)


@pytest.fixture(autouse=True)
def setup_database() -> Iterator[None]:
    """Give every test empty tables and freshly loaded settings."""

    from app.config import reset_settings_cache
    from app.infrastructure import database

    reset_settings_cache()
    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    reset_settings_cache()


@pytest.fixture()
def db_session():
    from app.infrastructure.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def configure(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Override settings through environment variables for one test."""

    from app.config import reset_settings_cache

    def _configure(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(key.upper(), value)
        reset_settings_cache()

    return _configure


@pytest.fixture()
def client():
    """Return a test client bound to a clean application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    from app.infrastructure.security import create_access_token

    def _headers(recipient_id: str, role: str = "user") -> dict[str, str]:
        token = create_access_token({"sub": recipient_id, "role": role})
        return {"Authorization": f"Bearer {token}"}

    return _headers
