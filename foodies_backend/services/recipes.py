"""Recipe writes and the detail view."""
import logging

from fastapi import status
from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..constants import messages
from ..middleware.errors import ApiError
from ..models.area import Area
from ..models.category import Category
from ..models.favorite_recipe import UserFavoriteRecipe
from ..models.ingredient import Ingredient
from ..models.recipe import Recipe
from ..models.recipe_ingredient import RecipeIngredient
from ..models.user import User
from ..schemas.recipe import RecipeCreate, RecipeCreated, RecipeDetail, RecipeIngredientItem

logger = logging.getLogger(__name__)


async def _lookup_id(db: AsyncSession, model, name: str) -> int | None:
    result = await db.execute(select(model.id).where(model.name == name))
    return result.scalar_one_or_none()


async def create_recipe(db: AsyncSession, owner_id: int, body: RecipeCreate) -> RecipeCreated:
    """Insert a recipe and its ingredient rows.

    Runs inside the request transaction: a failure at any step leaves neither
    the recipe nor any of its ingredient rows behind.
    """
    category_id = await _lookup_id(db, Category, body.category)
    if category_id is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.CATEGORY_NOT_FOUND)
    area_id = await _lookup_id(db, Area, body.area)
    if area_id is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.AREA_NOT_FOUND)

    ingredient_ids = [item.id for item in body.ingredients]
    if ingredient_ids:
        result = await db.execute(select(Ingredient.id).where(Ingredient.id.in_(ingredient_ids)))
        known = set(result.scalars().all())
        if known != set(ingredient_ids):
            raise ApiError(status.HTTP_400_BAD_REQUEST, messages.INGREDIENT_NOT_FOUND)

    recipe = Recipe(
        title=body.title,
        description=body.description,
        instructions=body.instructions,
        thumb=body.thumb,
        time=body.time,
        category_id=category_id,
        area_id=area_id,
        owner_id=owner_id,
    )
    db.add(recipe)
    await db.flush()

    if body.ingredients:
        await db.execute(
            insert(RecipeIngredient),
            [
                {"recipe_id": recipe.id, "ingredient_id": item.id, "measure": item.measure}
                for item in body.ingredients
            ],
        )

    logger.info("Recipe %s created by user %s", recipe.id, owner_id)
    return RecipeCreated(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        instructions=recipe.instructions,
        thumb=recipe.thumb,
        time=recipe.time,
        created_at=recipe.created_at,
    )


async def recipe_exists(db: AsyncSession, recipe_id: int) -> bool:
    result = await db.execute(select(Recipe.id).where(Recipe.id == recipe_id))
    return result.first() is not None


async def get_recipe_detail(db: AsyncSession, recipe_id: int) -> RecipeDetail | None:
    result = await db.execute(
        select(
            Recipe.id,
            Recipe.title,
            Recipe.description,
            Recipe.instructions,
            Recipe.thumb,
            Recipe.time,
            Category.name.label("category"),
            Area.name.label("area"),
            User.id.label("owner_id"),
            User.name.label("owner_name"),
            User.avatar.label("owner_avatar"),
            Recipe.created_at,
            Recipe.updated_at,
        )
        .select_from(Recipe)
        .outerjoin(Category, Recipe.category_id == Category.id)
        .outerjoin(Area, Recipe.area_id == Area.id)
        .outerjoin(User, Recipe.owner_id == User.id)
        .where(Recipe.id == recipe_id)
    )
    row = result.first()
    if row is None:
        return None

    ingredients_result = await db.execute(
        select(Ingredient.id, Ingredient.name, RecipeIngredient.measure)
        .select_from(RecipeIngredient)
        .join(Ingredient, RecipeIngredient.ingredient_id == Ingredient.id)
        .where(RecipeIngredient.recipe_id == recipe_id)
        .order_by(Ingredient.name)
    )
    favorites_count = (
        await db.execute(
            select(func.count(UserFavoriteRecipe.id)).where(UserFavoriteRecipe.recipe_id == recipe_id)
        )
    ).scalar_one()

    return RecipeDetail(
        **row._mapping,
        ingredients=[RecipeIngredientItem(**r._mapping) for r in ingredients_result.all()],
        favoritesCount=int(favorites_count),
    )


async def delete_own_recipe(db: AsyncSession, owner_id: int, recipe_id: int) -> None:
    """Delete only when owned; a foreign or missing recipe both read as 404."""
    result = await db.execute(
        delete(Recipe).where(Recipe.id == recipe_id, Recipe.owner_id == owner_id)
    )
    if result.rowcount == 0:
        raise ApiError(status.HTTP_404_NOT_FOUND, messages.RECIPE_NOT_OWNED)
    logger.info("Recipe %s deleted by user %s", recipe_id, owner_id)
