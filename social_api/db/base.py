"""SQLAlchemy declarative base and model imports for Alembic."""
from social_api.db.session import Base  # noqa: F401
from social_api.models.user import User  # noqa: F401
from social_api.models.post import Post  # noqa: F401

__all__ = ["Base", "User", "Post"]
