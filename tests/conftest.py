# tests/conftest.py
from __future__ import annotations

import os
import threading
from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Cheap hashes for tests; read when social_api.core.security is imported.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("EMAIL_BACKEND", "console")

from social_api.core.config import Settings
from social_api.db.session import Base, build_session_maker
from social_api.main import create_app
from social_api.services.email_templates import EmailMessage

API = "/api/v1"


class RecordingMailer:
    """Collects messages instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self._lock = threading.Lock()

    def send(self, message: EmailMessage) -> None:
        with self._lock:
            self.sent.append(message)

    @property
    def subjects(self) -> list[str]:
        return [m.subject for m in self.sent]


class FailingMailer:
    def send(self, message: EmailMessage) -> None:
        raise ConnectionRefusedError("smtp down")


def _sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=_sqlite_url(tmp_path / "api.db"),
        DB_CREATE_ALL=True,
        EMAIL_BACKEND="console",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def app(test_settings: Settings, mailer: RecordingMailer) -> FastAPI:
    return create_app(test_settings, mailer=mailer)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def session_maker(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(_sqlite_url(tmp_path / "service.db"))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield build_session_maker(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


def register_user(client: TestClient, username: str, email: str | None = None, password: str = "secret-pass") -> dict[str, Any]:
    r = client.post(
        f"{API}/auth/register",
        json={"username": username, "email": email or f"{username}@example.com", "password": password},
    )
    assert r.status_code == 201, r.text
    return r.json()["user"]


def create_post(client: TestClient, user_id: str, title: str = "Hello", description: str = "First post") -> dict[str, Any]:
    r = client.post(f"{API}/posts", json={"title": title, "description": description, "userId": user_id})
    assert r.status_code == 201, r.text
    return r.json()
