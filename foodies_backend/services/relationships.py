"""Favorite and follow edges.

Duplicate edges are caught by the tables' unique constraints; the
IntegrityError is turned into the "already ..." response.
"""
import logging

from fastapi import status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..constants import messages
from ..middleware.errors import ApiError
from ..models.favorite_recipe import UserFavoriteRecipe
from ..models.recipe import Recipe
from ..models.user import User
from ..models.user_follow import UserFollow

logger = logging.getLogger(__name__)


async def _exists(db: AsyncSession, column, value: int) -> bool:
    result = await db.execute(select(column).where(column == value).limit(1))
    return result.first() is not None


async def _insert_edge(db: AsyncSession, edge, duplicate_message: str) -> None:
    db.add(edge)
    try:
        await db.flush()
    except IntegrityError:
        # rollback expires every loaded instance; callers must not touch ORM state afterwards
        await db.rollback()
        raise ApiError(status.HTTP_400_BAD_REQUEST, duplicate_message)


async def add_favorite(db: AsyncSession, user_id: int, recipe_id: int) -> None:
    if not await _exists(db, Recipe.id, recipe_id):
        raise ApiError(status.HTTP_404_NOT_FOUND, messages.RECIPE_NOT_FOUND)
    await _insert_edge(
        db,
        UserFavoriteRecipe(user_id=user_id, recipe_id=recipe_id),
        messages.RECIPE_ALREADY_FAVORITE,
    )
    logger.info("User %s favorited recipe %s", user_id, recipe_id)


async def remove_favorite(db: AsyncSession, user_id: int, recipe_id: int) -> None:
    result = await db.execute(
        delete(UserFavoriteRecipe).where(
            UserFavoriteRecipe.user_id == user_id,
            UserFavoriteRecipe.recipe_id == recipe_id,
        )
    )
    if result.rowcount == 0:
        raise ApiError(status.HTTP_404_NOT_FOUND, messages.RECIPE_NOT_FAVORITE)


async def follow(db: AsyncSession, follower_id: int, following_id: int) -> None:
    if follower_id == following_id:
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.CANNOT_FOLLOW_SELF)
    if not await _exists(db, User.id, following_id):
        raise ApiError(status.HTTP_404_NOT_FOUND, messages.USER_NOT_FOUND)
    await _insert_edge(
        db,
        UserFollow(follower_id=follower_id, following_id=following_id),
        messages.ALREADY_FOLLOWING,
    )
    logger.info("User %s followed user %s", follower_id, following_id)


async def unfollow(db: AsyncSession, follower_id: int, following_id: int) -> None:
    result = await db.execute(
        delete(UserFollow).where(
            UserFollow.follower_id == follower_id,
            UserFollow.following_id == following_id,
        )
    )
    if result.rowcount == 0:
        raise ApiError(status.HTTP_404_NOT_FOUND, messages.NOT_FOLLOWING)
