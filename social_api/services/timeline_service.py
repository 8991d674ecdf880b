"""Timeline: a user's own posts followed by the posts of everyone they follow."""
import asyncio
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from social_api.models.post import Post
from social_api.services.auth_service import get_user

logger = logging.getLogger(__name__)


async def get_posts_by_user(db: AsyncSession, user_id: UUID) -> list[Post]:
    result = await db.execute(select(Post).where(Post.user_id == user_id).order_by(Post.created_at))
    return list(result.scalars().all())


async def _posts_in_own_session(session_maker: async_sessionmaker[AsyncSession], user_id: UUID) -> list[Post]:
    # An AsyncSession runs one statement at a time; each concurrent lookup needs its own.
    async with session_maker() as session:
        return await get_posts_by_user(session, user_id)


async def get_timeline(
    db: AsyncSession,
    session_maker: async_sessionmaker[AsyncSession],
    user_id: UUID,
) -> list[Post]:
    """Own posts first, then followed users' posts in the order their lookups finish.

    One query per followed user, run concurrently. No ordering across users.
    """
    user = await get_user(db, user_id)
    timeline = await get_posts_by_user(db, user.id)

    followed_ids = [UUID(uid) for uid in (user.followings or [])]
    if not followed_ids:
        return timeline

    async def collect(uid: UUID) -> None:
        timeline.extend(await _posts_in_own_session(session_maker, uid))

    # A failed lookup cancels the rest; no session outlives the request.
    try:
        async with asyncio.TaskGroup() as group:
            for uid in followed_ids:
                group.create_task(collect(uid))
    except ExceptionGroup as failed:
        raise failed.exceptions[0] from failed
    logger.debug("Timeline for %s: %d posts from %d followed users", user_id, len(timeline), len(followed_ids))
    return timeline
