"""Pydantic schemas for User."""
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import Field

from social_api.schemas.common import ActorRequest, CamelModel

EMAIL_PATTERN = r"^\w+([\.-]?\w+)*@\w+([\.-]?\w+)*(\.\w{2,3})+$"

# Fields a profile update may write. Anything else in the body is ignored.
PROFILE_FIELDS = {
    "username",
    "email",
    "password",
    "profile_picture",
    "cover_picture",
    "desc",
    "city",
    "hometown",
    "relationship",
}

# Profile fields a client may clear by sending null.
NULLABLE_PROFILE_FIELDS = {"profile_picture", "city", "hometown", "relationship"}


class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=20)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=100)


class LoginRequest(CamelModel):
    email: str
    password: str


class AdminActorRequest(ActorRequest):
    is_admin: bool = False


class UserUpdate(AdminActorRequest):
    username: str | None = Field(None, min_length=3, max_length=20)
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    password: str | None = Field(None, min_length=1, max_length=100)
    profile_picture: str | None = Field(None, max_length=50)
    cover_picture: str | None = None
    desc: str | None = None
    city: str | None = Field(None, max_length=50)
    hometown: str | None = Field(None, max_length=50, alias="from")
    relationship: Literal[1, 2, 3] | None = None

    def changes(self) -> dict[str, Any]:
        """Profile fields the client actually sent (userId/isAdmin are never written).

        An explicit null clears a nullable field and is ignored for the rest.
        """
        sent = self.model_dump(include=PROFILE_FIELDS, exclude_unset=True)
        return {k: v for k, v in sent.items() if v is not None or k in NULLABLE_PROFILE_FIELDS}


class UserProfile(CamelModel):
    id: UUID
    username: str
    email: str
    profile_picture: str | None = None
    cover_picture: str = ""
    followers: list[str] = []
    followings: list[str] = []
    is_admin: bool = False
    desc: str = ""
    city: str | None = None
    hometown: str | None = Field(None, alias="from")
    relationship: int | None = None
    created_at: datetime | None = None


class UserResponse(UserProfile):
    updated_at: datetime | None = None


class AuthResponse(CamelModel):
    message: str
    user: UserResponse


class UserUpdateResponse(CamelModel):
    message: str
    user: UserResponse


class FollowResponse(CamelModel):
    message: str
    user: UserResponse | None = None
    current_user: UserResponse | None = None
