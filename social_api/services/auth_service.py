"""Credential store: registration, login and profile maintenance."""
import logging
from typing import Any
from uuid import UUID

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.core.errors import ConflictError, InvalidCredentialsError, NotFoundError, UnauthorizedError
from social_api.core.security import get_password_hash, pwd_context as default_pwd_context, verify_password
from social_api.models.user import User
from social_api.schemas.user import UserCreate, UserProfile, UserResponse

logger = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: UUID) -> User:
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def _flush_unique(db: AsyncSession) -> None:
    # The unique indexes are the final word when two writers race past the lookups.
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Username or email already exists") from exc


async def register(db: AsyncSession, data: UserCreate, pwd_context: CryptContext = default_pwd_context) -> User:
    if await get_user_by_email(db, data.email):
        raise ConflictError("Email already registered")
    if await get_user_by_username(db, data.username):
        raise ConflictError("Username already taken")
    user = User(
        username=data.username,
        email=data.email,
        password_hash=get_password_hash(data.password, pwd_context),
    )
    db.add(user)
    await _flush_unique(db)
    await db.refresh(user)
    logger.info("Registered user %s (%s)", user.username, user.id)
    return user


async def authenticate(
    db: AsyncSession, email: str, password: str, pwd_context: CryptContext = default_pwd_context
) -> User:
    """Same error for unknown email and wrong password."""
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash, pwd_context):
        raise InvalidCredentialsError()
    return user


def ensure_can_manage(target_id: UUID, requester_id: UUID, requester_is_admin: bool, action: str) -> None:
    if requester_id != target_id and not requester_is_admin:
        logger.warning("User %s denied %s on profile %s", requester_id, action, target_id)
        raise UnauthorizedError(f"You are not authorized to {action} this profile")


async def update_profile(
    db: AsyncSession,
    target_id: UUID,
    requester_id: UUID,
    requester_is_admin: bool,
    changes: dict[str, Any],
    pwd_context: CryptContext = default_pwd_context,
) -> User:
    ensure_can_manage(target_id, requester_id, requester_is_admin, "update")
    user = await get_user(db, target_id)

    username = changes.get("username")
    if username and username != user.username and await get_user_by_username(db, username):
        raise ConflictError("Username already taken")
    email = changes.get("email")
    if email and email != user.email and await get_user_by_email(db, email):
        raise ConflictError("Email already registered")

    for field, value in changes.items():
        if field == "password":
            user.password_hash = get_password_hash(value, pwd_context)
        else:
            setattr(user, field, value)
    await _flush_unique(db)
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, target_id: UUID, requester_id: UUID, requester_is_admin: bool) -> None:
    """Hard delete. Posts and other users' follow lists are left untouched."""
    ensure_can_manage(target_id, requester_id, requester_is_admin, "delete")
    user = await get_user(db, target_id)
    await db.delete(user)
    await db.flush()
    logger.info("Deleted user %s", target_id)


def user_to_profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        username=user.username,
        email=user.email,
        profile_picture=user.profile_picture,
        cover_picture=user.cover_picture or "",
        followers=list(user.followers or []),
        followings=list(user.followings or []),
        is_admin=bool(user.is_admin),
        desc=user.desc or "",
        city=user.city,
        hometown=user.hometown,
        relationship=user.relationship,
        created_at=user.created_at,
    )


def user_to_response(user: User) -> UserResponse:
    return UserResponse(**user_to_profile(user).model_dump(), updated_at=user.updated_at)
