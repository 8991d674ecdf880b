"""Async database engine/session factories and the per-request session dependency."""
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from social_api.core.config import Settings
from social_api.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def masked_url(url: str) -> str:
    # Mask credentials in logs (show only host/db part)
    return "...@" + url.split("@")[-1].split("?")[0] if "@" in url else url.split("?")[0]


def build_engine(settings: Settings) -> AsyncEngine:
    url = settings.DATABASE_URL
    logger.info("Database URL: %s", masked_url(url))
    kwargs = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if url.startswith("postgresql"):
        kwargs.update(pool_size=10, max_overflow=20, connect_args={"timeout": 10})
    return create_async_engine(url, **kwargs)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One session (and one transaction) per request: commit on success, roll back on error."""
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def standalone_session(settings: Settings) -> AsyncIterator[AsyncSession]:
    """Session outside the web app (scripts). The caller commits."""
    if not settings.DATABASE_URL:
        raise ConfigurationError("DATABASE_URL is not defined in the environment variables.")
    engine = build_engine(settings)
    try:
        async with build_session_maker(engine)() as session:
            yield session
    finally:
        await engine.dispose()
