"""Auth endpoints: register, login."""
import logging

from fastapi import APIRouter, Depends, status
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.api.deps import get_db, get_notifier, get_password_context
from social_api.schemas.user import AuthResponse, LoginRequest, UserCreate
from social_api.services.auth_service import authenticate, register, user_to_response
from social_api.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    pwd_context: CryptContext = Depends(get_password_context),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    logger.info("Register attempt: %s %s", data.username, data.email)
    user = await register(db, data, pwd_context)
    await db.commit()
    notifier.registered(user.email, user.username)
    return AuthResponse(message="User registered successfully", user=user_to_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
    pwd_context: CryptContext = Depends(get_password_context),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    logger.info("Login attempt: %s", data.email)
    user = await authenticate(db, data.email, data.password, pwd_context)
    notifier.logged_in(user.email, user.username)
    return AuthResponse(message="Logged in successfully", user=user_to_response(user))
