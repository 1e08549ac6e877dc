"""Profiles, avatar upload and follow relationships."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config.database import get_db
from ...constants import messages
from ...middleware.errors import ApiError
from ...middleware.jwt import CurrentUser
from ...models.favorite_recipe import UserFavoriteRecipe
from ...models.recipe import Recipe
from ...models.user import User
from ...models.user_follow import UserFollow
from ...schemas.common import DataMessageResponse, DataResponse, ErrorResponse, MessageResponse
from ...schemas.user import AvatarPayload, FollowUser, OwnProfile, ProfileUpdate, UserProfile
from ...services import relationships
from ...services.avatars import save_avatar

logger = logging.getLogger(__name__)

router = APIRouter(responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}})


async def _count(db: AsyncSession, column, value: int) -> int:
    result = await db.execute(select(func.count()).where(column == value))
    return int(result.scalar_one())


async def _own_profile(db: AsyncSession, user: User) -> OwnProfile:
    return OwnProfile(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        created_at=user.created_at,
        recipesCount=await _count(db, Recipe.owner_id, user.id),
        favoritesCount=await _count(db, UserFavoriteRecipe.user_id, user.id),
        followersCount=await _count(db, UserFollow.following_id, user.id),
        followingCount=await _count(db, UserFollow.follower_id, user.id),
    )


@router.get("/profile", response_model=DataResponse[OwnProfile], summary="Current user's profile")
async def get_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    return DataResponse(data=await _own_profile(db, user))


@router.patch(
    "/profile",
    response_model=DataMessageResponse[OwnProfile],
    summary="Update name and/or email",
    responses={400: {"model": ErrorResponse}},
)
async def update_profile(
    body: ProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    if body.name is None and body.email is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.NOTHING_TO_UPDATE)

    if body.email is not None and body.email != user.email:
        result = await db.execute(select(User.id).where(User.email == body.email, User.id != user.id))
        if result.first():
            raise ApiError(status.HTTP_400_BAD_REQUEST, messages.EMAIL_TAKEN)
        user.email = body.email
    if body.name is not None:
        user.name = body.name
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.EMAIL_TAKEN)
    await db.refresh(user)
    logger.info("User %s updated profile", user.id)
    return DataMessageResponse(message=messages.PROFILE_UPDATED, data=await _own_profile(db, user))


@router.put(
    "/avatar",
    response_model=DataMessageResponse[AvatarPayload],
    summary="Upload a new avatar (jpeg/png/gif, 5MB max)",
    responses={400: {"model": ErrorResponse}},
)
async def update_avatar(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
    avatar: UploadFile | None = File(None),
):
    user.avatar = await save_avatar(avatar)
    await db.flush()
    return DataMessageResponse(message=messages.AVATAR_UPDATED, data=AvatarPayload(avatar=user.avatar))


async def _follow_list(db: AsyncSession, join_column, filter_column, user_id: int) -> list[FollowUser]:
    result = await db.execute(
        select(User.id, User.name, User.email, User.avatar, UserFollow.created_at.label("followed_at"))
        .join(UserFollow, User.id == join_column)
        .where(filter_column == user_id)
        .order_by(UserFollow.created_at.desc(), UserFollow.id.desc())
    )
    return [FollowUser(**r._mapping) for r in result.all()]


@router.get("/followers", response_model=DataResponse[list[FollowUser]], summary="Users following me")
async def get_followers(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    return DataResponse(data=await _follow_list(db, UserFollow.follower_id, UserFollow.following_id, user.id))


@router.get("/following", response_model=DataResponse[list[FollowUser]], summary="Users I follow")
async def get_following(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    return DataResponse(data=await _follow_list(db, UserFollow.following_id, UserFollow.follower_id, user.id))


@router.get(
    "/{user_id}",
    response_model=DataResponse[UserProfile],
    summary="Another user's profile",
    responses={404: {"model": ErrorResponse}},
)
async def get_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: CurrentUser,
):
    other = await db.get(User, user_id)
    if not other:
        raise ApiError(status.HTTP_404_NOT_FOUND, messages.USER_NOT_FOUND)
    return DataResponse(
        data=UserProfile(
            id=other.id,
            name=other.name,
            email=other.email,
            avatar=other.avatar,
            created_at=other.created_at,
            recipesCount=await _count(db, Recipe.owner_id, other.id),
            followersCount=await _count(db, UserFollow.following_id, other.id),
        )
    )


@router.post(
    "/{user_id}/follow",
    response_model=MessageResponse,
    summary="Follow a user",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def follow_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    await relationships.follow(db, user.id, user_id)
    return MessageResponse(message=messages.FOLLOW_SUCCESS)


@router.delete(
    "/{user_id}/follow",
    response_model=MessageResponse,
    summary="Unfollow a user",
    responses={404: {"model": ErrorResponse}},
)
async def unfollow_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    await relationships.unfollow(db, user.id, user_id)
    return MessageResponse(message=messages.UNFOLLOW_SUCCESS)
