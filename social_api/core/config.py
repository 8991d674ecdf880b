"""Application configuration loaded from environment variables."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "SocialMedia API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database (required; startup aborts without it)
    DATABASE_URL: str | None = None
    DB_CREATE_ALL: bool = False  # Create tables on startup (dev/tests). Production uses alembic.

    # Password hashing
    BCRYPT_ROUNDS: int = 10

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"

    # Email: celery | smtp | console
    EMAIL_BACKEND: str = "celery"
    EMAIL_USER: str | None = None
    EMAIL_PASS: str | None = None
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USE_TLS: bool = True
    MAIL_PRODUCT_NAME: str = "SocialMedia"
    MAIL_PRODUCT_LINK: str = "https://yourcompany.com/"
    NOTIFICATION_QUEUE_SIZE: int = 1000


settings = Settings()
