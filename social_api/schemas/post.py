"""Pydantic schemas for Post."""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from social_api.schemas.common import ActorRequest, CamelModel

POST_FIELDS = {"title", "description"}


class PostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    user_id: UUID


class PostUpdate(ActorRequest):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(include=POST_FIELDS, exclude_unset=True, exclude_none=True)


class CommentIn(CamelModel):
    user_id: UUID
    text: str = Field(..., min_length=1)


class CommentsAdd(CamelModel):
    comments: list[CommentIn]

    @field_validator("comments", mode="before")
    @classmethod
    def _wrap_single(cls, value: Any) -> Any:
        # A lone {userId, text} object is accepted as a one-item list.
        if isinstance(value, dict):
            return [value]
        return value


class CommentOut(CamelModel):
    user_id: str
    text: str


class PostResponse(CamelModel):
    id: UUID
    user_id: UUID
    title: str
    description: str
    likes: list[str] = []
    comments: list[CommentOut] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TimelineRequest(CamelModel):
    user_id: UUID
