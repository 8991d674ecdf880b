"""Posts CRUD, likes, comments and timeline."""
import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from social_api.api.deps import get_db, get_notifier, get_session_maker
from social_api.core.errors import ValidationError
from social_api.models.post import Post
from social_api.schemas.common import ActorRequest, MessageResponse
from social_api.schemas.post import CommentsAdd, PostCreate, PostResponse, PostUpdate, TimelineRequest
from social_api.services import post_service
from social_api.services.auth_service import get_user_by_id
from social_api.services.notification_service import NotificationDispatcher
from social_api.services.post_service import LikeOutcome, post_to_response
from social_api.services.timeline_service import get_timeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

LIKE_MESSAGES = {
    LikeOutcome.LIKED: "Post has been liked",
    LikeOutcome.DISLIKED: "Post has been disliked",
}


async def _owner_contact(db: AsyncSession, post: Post) -> tuple[str, str] | None:
    owner = await get_user_by_id(db, post.user_id)
    if owner is None:
        logger.info("Post %s has no resolvable owner %s; skipping email", post.id, post.user_id)
        return None
    return owner.email, owner.username


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    post = await post_service.create_post(db, data)
    await db.commit()
    contact = await _owner_contact(db, post)
    if contact:
        notifier.post_created(*contact, post.title)
    return post_to_response(post)


@router.get("/timeline", response_model=list[PostResponse])
async def timeline(
    body: TimelineRequest | None = Body(None),
    user_id: UUID | None = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db),
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
):
    """Timeline for ``userId`` (JSON body, or query string for clients that cannot send a GET body)."""
    requested = body.user_id if body is not None else user_id
    if requested is None:
        raise ValidationError("userId is required")
    posts = await get_timeline(db, session_maker, requested)
    return [post_to_response(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: UUID, db: AsyncSession = Depends(get_db)):
    post = await post_service.get_post(db, post_id)
    return post_to_response(post)


@router.put("/{post_id}", response_model=MessageResponse)
async def update_post(
    post_id: UUID,
    data: PostUpdate,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    post = await post_service.update_post(db, post_id, data.user_id, data.changes())
    await db.commit()
    contact = await _owner_contact(db, post)
    if contact:
        notifier.post_updated(*contact, post.title)
    return MessageResponse(message="Post updated successfully")


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: UUID,
    data: ActorRequest,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    post = await post_service.delete_post(db, post_id, data.user_id)
    await db.commit()
    contact = await _owner_contact(db, post)
    if contact:
        notifier.post_deleted(*contact, post.title)
    return MessageResponse(message="Post deleted successfully")


@router.put("/{post_id}/like", response_model=MessageResponse)
async def like_post(
    post_id: UUID,
    data: ActorRequest,
    db: AsyncSession = Depends(get_db),
):
    outcome = await post_service.toggle_like(db, post_id, data.user_id)
    await db.commit()
    return MessageResponse(message=LIKE_MESSAGES[outcome])


@router.put("/{post_id}/comments", response_model=PostResponse)
async def add_comments(
    post_id: UUID,
    data: CommentsAdd,
    db: AsyncSession = Depends(get_db),
):
    post = await post_service.add_comments(db, post_id, data.comments)
    await db.commit()
    return post_to_response(post)
