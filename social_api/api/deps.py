"""API dependencies: db session, session factory, password hashing, notifications."""
from fastapi import Request
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from social_api.db.session import get_db
from social_api.services.notification_service import NotificationDispatcher

__all__ = ["get_db", "get_session_maker", "get_password_context", "get_notifier"]


def get_session_maker(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_maker


def get_password_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def get_notifier(request: Request) -> NotificationDispatcher:
    return request.app.state.notifier
