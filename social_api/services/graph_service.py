"""Social graph: follow/unfollow edges stored on both user rows.

An edge A -> B is written twice: A's id in B.followers and B's id in
A.followings. Both rows are locked and re-read before either list changes,
and both writes go through the caller's session, so they commit or roll back
together with the request transaction.
"""
import enum
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.core.errors import NotFoundError, SelfReferenceError
from social_api.models.user import User

logger = logging.getLogger(__name__)


class FollowOutcome(str, enum.Enum):
    FOLLOWED = "followed"
    ALREADY_FOLLOWING = "already_following"
    UNFOLLOWED = "unfollowed"
    NOT_FOLLOWING = "not_following"


async def _lock_pair(db: AsyncSession, target_id: UUID, actor_id: UUID) -> tuple[User, User]:
    # Locks are taken in id order so two requests on the same pair cannot deadlock.
    # populate_existing replaces any stale copy already in the session.
    stmt = (
        select(User)
        .where(User.id.in_([target_id, actor_id]))
        .order_by(User.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    users = {user.id: user for user in (await db.execute(stmt)).scalars()}
    if target_id not in users:
        raise NotFoundError("User not found")
    if actor_id not in users:
        raise NotFoundError("Current user not found")
    return users[target_id], users[actor_id]


async def follow(db: AsyncSession, target_id: UUID, actor_id: UUID) -> tuple[FollowOutcome, User, User]:
    if target_id == actor_id:
        raise SelfReferenceError("You cannot follow yourself")
    target, actor = await _lock_pair(db, target_id, actor_id)
    actor_key, target_key = str(actor_id), str(target_id)
    if actor_key in (target.followers or []):
        return FollowOutcome.ALREADY_FOLLOWING, target, actor

    # JSON columns are reassigned, not mutated in place, so the ORM sees the change.
    target.followers = [*(target.followers or []), actor_key]
    if target_key not in (actor.followings or []):
        actor.followings = [*(actor.followings or []), target_key]
    await db.flush()
    logger.info("User %s followed %s", actor_id, target_id)
    return FollowOutcome.FOLLOWED, target, actor


async def unfollow(db: AsyncSession, target_id: UUID, actor_id: UUID) -> tuple[FollowOutcome, User, User]:
    if target_id == actor_id:
        raise SelfReferenceError("You cannot unfollow yourself")
    target, actor = await _lock_pair(db, target_id, actor_id)
    actor_key, target_key = str(actor_id), str(target_id)
    if actor_key not in (target.followers or []):
        return FollowOutcome.NOT_FOLLOWING, target, actor

    target.followers = [uid for uid in target.followers if uid != actor_key]
    actor.followings = [uid for uid in (actor.followings or []) if uid != target_key]
    await db.flush()
    logger.info("User %s unfollowed %s", actor_id, target_id)
    return FollowOutcome.UNFOLLOWED, target, actor


async def reconcile_follow_edges(db: AsyncSession) -> int:
    """Make every edge bidirectional and drop self-references.

    Edges pointing at users that no longer exist are left alone, matching the
    non-cascading delete. Returns the number of user rows changed.
    """
    users = list((await db.execute(select(User))).scalars().all())
    by_key = {str(u.id): u for u in users}
    followers = {key: list(u.followers or []) for key, u in by_key.items()}
    followings = {key: list(u.followings or []) for key, u in by_key.items()}

    for key in by_key:
        followers[key] = [uid for uid in followers[key] if uid != key]
        followings[key] = [uid for uid in followings[key] if uid != key]

    for key in by_key:
        for other in followings[key]:
            if other in by_key and key not in followers[other]:
                followers[other].append(key)
        for other in followers[key]:
            if other in by_key and key not in followings[other]:
                followings[other].append(key)

    changed = 0
    for key, user in by_key.items():
        if followers[key] != list(user.followers or []) or followings[key] != list(user.followings or []):
            user.followers = followers[key]
            user.followings = followings[key]
            changed += 1
    await db.flush()
    if changed:
        logger.info("Reconciled follow lists on %d users", changed)
    return changed
