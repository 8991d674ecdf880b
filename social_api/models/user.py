"""User model. Follow lists live on the user row as JSON arrays of user-id strings."""
import uuid

from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB

from social_api.db.session import Base, utcnow

JSONList = JSON().with_variant(JSONB(), "postgresql")


class User(Base):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("relationship IN (1, 2, 3)", name="ck_users_relationship"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(20), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    profile_picture = Column(String(50), nullable=True)
    cover_picture = Column(Text, nullable=False, default="")
    followers = Column(JSONList, nullable=False, default=list)
    followings = Column(JSONList, nullable=False, default=list)
    is_admin = Column(Boolean, nullable=False, default=False)
    desc = Column(Text, nullable=False, default="")
    city = Column(String(50), nullable=True)
    hometown = Column("from", String(50), nullable=True)
    relationship = Column(Integer, nullable=True)  # 1 | 2 | 3
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.id})>"
