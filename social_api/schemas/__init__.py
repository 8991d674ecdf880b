from social_api.schemas.common import ActorRequest, MessageResponse
from social_api.schemas.user import (
    UserCreate,
    UserUpdate,
    UserProfile,
    UserResponse,
    AuthResponse,
    FollowResponse,
    LoginRequest,
)
from social_api.schemas.post import PostCreate, PostUpdate, PostResponse, CommentsAdd, TimelineRequest
