"""User profile and follow endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.api.deps import get_db, get_password_context
from social_api.schemas.common import ActorRequest, MessageResponse
from social_api.schemas.user import AdminActorRequest, FollowResponse, UserProfile, UserUpdate, UserUpdateResponse
from social_api.services import auth_service, graph_service
from social_api.services.auth_service import user_to_profile, user_to_response
from social_api.services.graph_service import FollowOutcome

router = APIRouter(prefix="/users", tags=["users"])

FOLLOW_MESSAGES = {
    FollowOutcome.FOLLOWED: "User followed successfully",
    FollowOutcome.ALREADY_FOLLOWING: "User is already following this user",
    FollowOutcome.UNFOLLOWED: "User unfollowed successfully",
    FollowOutcome.NOT_FOLLOWING: "User is not following this user",
}


@router.put("/{user_id}", response_model=UserUpdateResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    pwd_context: CryptContext = Depends(get_password_context),
):
    user = await auth_service.update_profile(db, user_id, data.user_id, data.is_admin, data.changes(), pwd_context)
    await db.commit()
    return UserUpdateResponse(message="User updated successfully", user=user_to_response(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    data: AdminActorRequest,
    db: AsyncSession = Depends(get_db),
):
    await auth_service.delete_user(db, user_id, data.user_id, data.is_admin)
    await db.commit()
    return MessageResponse(message="Account has been deleted successfully")


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    user = await auth_service.get_user(db, user_id)
    return user_to_profile(user)


def _follow_response(outcome: FollowOutcome, target, actor) -> FollowResponse:
    if outcome in (FollowOutcome.ALREADY_FOLLOWING, FollowOutcome.NOT_FOLLOWING):
        return FollowResponse(message=FOLLOW_MESSAGES[outcome])
    return FollowResponse(
        message=FOLLOW_MESSAGES[outcome],
        user=user_to_response(target),
        current_user=user_to_response(actor),
    )


@router.put("/{user_id}/follow", response_model=FollowResponse)
async def follow_user(
    user_id: UUID,
    data: ActorRequest,
    db: AsyncSession = Depends(get_db),
):
    outcome, target, actor = await graph_service.follow(db, user_id, data.user_id)
    await db.commit()
    return _follow_response(outcome, target, actor)


@router.put("/{user_id}/unfollow", response_model=FollowResponse)
async def unfollow_user(
    user_id: UUID,
    data: ActorRequest,
    db: AsyncSession = Depends(get_db),
):
    outcome, target, actor = await graph_service.unfollow(db, user_id, data.user_id)
    await db.commit()
    return _follow_response(outcome, target, actor)
