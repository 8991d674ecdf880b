"""Security utilities: password hashing."""
from passlib.context import CryptContext

from social_api.core.config import settings


def build_password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


# Used by scripts and service calls made outside the app; the app builds its own in the lifespan.
pwd_context = build_password_context(settings.BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str, context: CryptContext = pwd_context) -> bool:
    return context.verify(plain_password, hashed_password)


def get_password_hash(password: str, context: CryptContext = pwd_context) -> str:
    return context.hash(password)
