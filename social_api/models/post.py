"""Post model with embedded likes and comments."""
import uuid

from sqlalchemy import Column, DateTime, String, Text, Uuid

from social_api.db.session import Base, utcnow
from social_api.models.user import JSONList


class Post(Base):
    __tablename__ = "posts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # No foreign key: deleting a user leaves their posts in place.
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    likes = Column(JSONList, nullable=False, default=list)  # user-id strings
    comments = Column(JSONList, nullable=False, default=list)  # [{"userId": ..., "text": ...}]
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
