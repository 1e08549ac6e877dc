"""Recipe search, detail, create/delete and favorites."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...config.database import get_db
from ...config.settings import settings
from ...constants import messages
from ...middleware.errors import ApiError
from ...middleware.jwt import CurrentUser
from ...schemas.common import DataMessageResponse, DataResponse, ErrorResponse, MessageResponse
from ...schemas.recipe import (
    FavoriteRecipeCard,
    OwnRecipeCard,
    RecipeCard,
    RecipeCreate,
    RecipeCreated,
    RecipeDetail,
    RecipePage,
)
from ...services import recipes as recipe_service
from ...services import relationships
from ...services.pagination import PageParams, fetch_page
from ...services.recipe_search import (
    RecipeFilters,
    RecipeSearch,
    favorite_recipes_statements,
    own_recipes_statements,
    popular_statement,
)

router = APIRouter()


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.pagination_default_limit, ge=1, le=settings.pagination_max_limit),
) -> PageParams:
    return PageParams(page=page, limit=limit)


Paging = Annotated[PageParams, Depends(page_params)]


@router.get(
    "/search",
    response_model=DataResponse[RecipePage[RecipeCard]],
    summary="Search recipes by category, area, ingredient, title and cooking time",
)
async def search_recipes(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Paging,
    category: str | None = Query(None, description="exact category name"),
    area: str | None = Query(None, description="exact area name"),
    ingredient: str | None = Query(None, description="ingredient name substring"),
    title: str | None = Query(None, description="title substring"),
    time_min: int | None = Query(None, alias="timeMin", ge=0),
    time_max: int | None = Query(None, alias="timeMax", ge=0),
):
    filters = RecipeFilters(
        category=category,
        area=area,
        ingredient=ingredient,
        title=title,
        time_min=time_min,
        time_max=time_max,
    )
    search = RecipeSearch.from_filters(filters)
    rows, pagination = await fetch_page(db, search.page_statement(), search.count_statement(), paging)
    return DataResponse(
        data=RecipePage[RecipeCard](
            recipes=[RecipeCard(**r._mapping) for r in rows],
            pagination=pagination,
        )
    )


@router.get(
    "/popular",
    response_model=DataResponse[list[RecipeCard]],
    summary="Most favorited recipes",
)
async def popular_recipes(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: int = Query(messages.POPULAR_DEFAULT_LIMIT, ge=1, le=settings.pagination_max_limit),
):
    result = await db.execute(popular_statement(limit))
    return DataResponse(data=[RecipeCard(**r._mapping) for r in result.all()])


@router.get(
    "/favorites",
    response_model=DataResponse[RecipePage[FavoriteRecipeCard]],
    summary="Recipes the current user favorited",
    responses={401: {"model": ErrorResponse}},
)
async def favorite_recipes(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
    paging: Paging,
):
    stmt, count_stmt = favorite_recipes_statements(user.id)
    rows, pagination = await fetch_page(db, stmt, count_stmt, paging)
    return DataResponse(
        data=RecipePage[FavoriteRecipeCard](
            recipes=[FavoriteRecipeCard(**r._mapping) for r in rows],
            pagination=pagination,
        )
    )


@router.get(
    "/my",
    response_model=DataResponse[RecipePage[OwnRecipeCard]],
    summary="Recipes owned by the current user",
    responses={401: {"model": ErrorResponse}},
)
async def my_recipes(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
    paging: Paging,
):
    stmt, count_stmt = own_recipes_statements(user.id)
    rows, pagination = await fetch_page(db, stmt, count_stmt, paging)
    return DataResponse(
        data=RecipePage[OwnRecipeCard](
            recipes=[OwnRecipeCard(**r._mapping) for r in rows],
            pagination=pagination,
        )
    )


@router.get(
    "/{recipe_id}",
    response_model=DataResponse[RecipeDetail],
    summary="Recipe detail with ingredients and favorites count",
    responses={404: {"model": ErrorResponse}},
)
async def get_recipe(
    recipe_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    detail = await recipe_service.get_recipe_detail(db, recipe_id)
    if detail is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, messages.RECIPE_NOT_FOUND)
    return DataResponse(data=detail)


@router.head("/{recipe_id}", summary="Recipe existence probe", include_in_schema=False)
async def recipe_exists(
    recipe_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    found = await recipe_service.recipe_exists(db, recipe_id)
    return Response(status_code=status.HTTP_200_OK if found else status.HTTP_404_NOT_FOUND)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=DataMessageResponse[RecipeCreated],
    summary="Create a recipe",
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def create_recipe(
    body: RecipeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    created = await recipe_service.create_recipe(db, user.id, body)
    return DataMessageResponse(message=messages.RECIPE_CREATED, data=created)


@router.delete(
    "/{recipe_id}",
    response_model=MessageResponse,
    summary="Delete one of your recipes",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_recipe(
    recipe_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    await recipe_service.delete_own_recipe(db, user.id, recipe_id)
    return MessageResponse(message=messages.RECIPE_DELETED)


@router.post(
    "/{recipe_id}/favorite",
    response_model=MessageResponse,
    summary="Add a recipe to favorites",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def add_favorite(
    recipe_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    await relationships.add_favorite(db, user.id, recipe_id)
    return MessageResponse(message=messages.RECIPE_FAVORITED)


@router.delete(
    "/{recipe_id}/favorite",
    response_model=MessageResponse,
    summary="Remove a recipe from favorites",
    responses={404: {"model": ErrorResponse}},
)
async def remove_favorite(
    recipe_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: CurrentUser,
):
    await relationships.remove_favorite(db, user.id, recipe_id)
    return MessageResponse(message=messages.RECIPE_UNFAVORITED)
