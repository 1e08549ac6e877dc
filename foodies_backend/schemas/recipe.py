"""Recipe API schemas."""
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

from ..constants import messages
from .common import Pagination

T = TypeVar("T")


class IngredientMeasure(BaseModel):
    id: int = Field(..., ge=1)
    measure: str = Field(..., min_length=1, max_length=messages.INGREDIENT_MEASURE_MAX_LENGTH)


class RecipeCreate(BaseModel):
    title: str = Field(..., min_length=messages.RECIPE_TITLE_MIN_LENGTH, max_length=messages.RECIPE_TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=messages.RECIPE_DESCRIPTION_MAX_LENGTH)
    instructions: str = Field(
        ...,
        min_length=messages.RECIPE_INSTRUCTIONS_MIN_LENGTH,
        max_length=messages.RECIPE_INSTRUCTIONS_MAX_LENGTH,
    )
    thumb: str | None = Field(None, max_length=500)
    time: int = Field(..., ge=messages.RECIPE_TIME_MIN, le=messages.RECIPE_TIME_MAX, description="minutes")
    category: str = Field(..., min_length=1)
    area: str = Field(..., min_length=1)
    ingredients: list[IngredientMeasure] = Field(default_factory=list)

    @field_validator("title", "instructions", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("ingredients")
    @classmethod
    def unique_ingredients(cls, v: list[IngredientMeasure]) -> list[IngredientMeasure]:
        ids = [item.id for item in v]
        if len(ids) != len(set(ids)):
            raise ValueError("each ingredient may be listed once")
        return v


class RecipeCreated(BaseModel):
    id: int
    title: str
    description: str | None = None
    instructions: str
    thumb: str | None = None
    time: int | None = None
    created_at: datetime


class RecipeCard(BaseModel):
    """Search / popular list row."""
    id: int
    title: str
    description: str | None = None
    thumb: str | None = None
    time: int | None = None
    category: str | None = None
    area: str | None = None
    owner_name: str | None = None
    owner_avatar: str | None = None
    favorites_count: int = 0


class OwnRecipeCard(BaseModel):
    id: int
    title: str
    description: str | None = None
    thumb: str | None = None
    time: int | None = None
    category: str | None = None
    area: str | None = None
    favorites_count: int = 0


class FavoriteRecipeCard(BaseModel):
    id: int
    title: str
    description: str | None = None
    thumb: str | None = None
    time: int | None = None
    category: str | None = None
    area: str | None = None
    owner_name: str | None = None
    owner_avatar: str | None = None
    favorited_at: datetime


class RecipePage(BaseModel, Generic[T]):
    recipes: list[T]
    pagination: Pagination


class RecipeIngredientItem(BaseModel):
    id: int
    name: str
    measure: str


class RecipeDetail(BaseModel):
    id: int
    title: str
    description: str | None = None
    instructions: str
    thumb: str | None = None
    time: int | None = None
    category: str | None = None
    area: str | None = None
    owner_id: int | None = None
    owner_name: str | None = None
    owner_avatar: str | None = None
    created_at: datetime
    updated_at: datetime
    ingredients: list[RecipeIngredientItem]
    favoritesCount: int
