"""Post store: creation, owner-guarded mutation, likes and comments."""
import enum
import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from social_api.core.errors import ForbiddenError, NotFoundError
from social_api.models.post import Post
from social_api.schemas.post import CommentIn, CommentOut, PostCreate, PostResponse

logger = logging.getLogger(__name__)


class LikeOutcome(str, enum.Enum):
    LIKED = "liked"
    DISLIKED = "disliked"


async def create_post(db: AsyncSession, data: PostCreate) -> Post:
    post = Post(user_id=data.user_id, title=data.title, description=data.description)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def get_post(db: AsyncSession, post_id: UUID, for_update: bool = False) -> Post:
    """With ``for_update`` the row is locked and re-read, replacing any stale copy in the session."""
    post = await db.get(Post, post_id, with_for_update=for_update, populate_existing=for_update)
    if post is None:
        raise NotFoundError("Post not found")
    return post


async def _get_owned_post(db: AsyncSession, post_id: UUID, requester_id: UUID, action: str) -> Post:
    post = await get_post(db, post_id)
    if post.user_id != requester_id:
        logger.warning("User %s denied %s on post %s owned by %s", requester_id, action, post_id, post.user_id)
        raise ForbiddenError(f"You can only {action} your own posts")
    return post


async def update_post(db: AsyncSession, post_id: UUID, requester_id: UUID, changes: dict[str, Any]) -> Post:
    post = await _get_owned_post(db, post_id, requester_id, "update")
    for field, value in changes.items():
        setattr(post, field, value)
    await db.flush()
    await db.refresh(post)
    return post


async def delete_post(db: AsyncSession, post_id: UUID, requester_id: UUID) -> Post:
    """Hard delete; returns the removed post so callers can still describe it."""
    post = await _get_owned_post(db, post_id, requester_id, "delete")
    await db.delete(post)
    await db.flush()
    return post


async def toggle_like(db: AsyncSession, post_id: UUID, actor_id: UUID) -> LikeOutcome:
    """Flip actor's membership in likes. Each call changes state."""
    post = await get_post(db, post_id, for_update=True)
    actor_key = str(actor_id)
    likes = list(post.likes or [])
    if actor_key in likes:
        post.likes = [uid for uid in likes if uid != actor_key]
        outcome = LikeOutcome.DISLIKED
    else:
        post.likes = [*likes, actor_key]
        outcome = LikeOutcome.LIKED
    await db.flush()
    return outcome


async def add_comments(db: AsyncSession, post_id: UUID, comments: list[CommentIn]) -> Post:
    post = await get_post(db, post_id, for_update=True)
    entries = [{"userId": str(c.user_id), "text": c.text} for c in comments]
    post.comments = [*(post.comments or []), *entries]
    await db.flush()
    await db.refresh(post)
    return post


def post_to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        title=post.title,
        description=post.description,
        likes=list(post.likes or []),
        comments=[CommentOut.model_validate(c) for c in (post.comments or [])],
        created_at=post.created_at,
        updated_at=post.updated_at,
    )
