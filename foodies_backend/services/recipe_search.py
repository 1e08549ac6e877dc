"""Recipe listing queries.

Search filters are modelled as predicate objects. Each predicate yields one
WHERE clause with its own bound parameter, and the same list feeds both the
page query and the COUNT query, so the two can never disagree on filters.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

from sqlalchemy import ColumnElement, Select, func, select

from ..models.area import Area
from ..models.category import Category
from ..models.favorite_recipe import UserFavoriteRecipe
from ..models.ingredient import Ingredient
from ..models.recipe import Recipe
from ..models.recipe_ingredient import RecipeIngredient
from ..models.user import User


class Predicate(ABC):
    """One optional search condition."""

    @abstractmethod
    def clause(self) -> ColumnElement[bool]:
        ...


@dataclass(frozen=True)
class CategoryIs(Predicate):
    name: str

    def clause(self) -> ColumnElement[bool]:
        return Category.name == self.name


@dataclass(frozen=True)
class AreaIs(Predicate):
    name: str

    def clause(self) -> ColumnElement[bool]:
        return Area.name == self.name


@dataclass(frozen=True)
class HasIngredientLike(Predicate):
    """Recipe uses at least one ingredient whose name contains `term` (case-insensitive)."""
    term: str

    def clause(self) -> ColumnElement[bool]:
        matching = (
            select(RecipeIngredient.recipe_id)
            .join(Ingredient, Ingredient.id == RecipeIngredient.ingredient_id)
            .where(Ingredient.name.icontains(self.term, autoescape=True))
        )
        return Recipe.id.in_(matching)


@dataclass(frozen=True)
class TitleLike(Predicate):
    term: str

    def clause(self) -> ColumnElement[bool]:
        return Recipe.title.icontains(self.term, autoescape=True)


@dataclass(frozen=True)
class TimeAtLeast(Predicate):
    minutes: int

    def clause(self) -> ColumnElement[bool]:
        return Recipe.time >= self.minutes


@dataclass(frozen=True)
class TimeAtMost(Predicate):
    minutes: int

    def clause(self) -> ColumnElement[bool]:
        return Recipe.time <= self.minutes


@dataclass(frozen=True)
class RecipeFilters:
    category: str | None = None
    area: str | None = None
    ingredient: str | None = None
    title: str | None = None
    time_min: int | None = None
    time_max: int | None = None

    def predicates(self) -> list[Predicate]:
        """Present filters in a fixed order; empty strings count as absent."""
        predicates: list[Predicate] = []
        if self.category:
            predicates.append(CategoryIs(self.category))
        if self.area:
            predicates.append(AreaIs(self.area))
        if self.ingredient:
            predicates.append(HasIngredientLike(self.ingredient))
        if self.title:
            predicates.append(TitleLike(self.title))
        if self.time_min is not None:
            predicates.append(TimeAtLeast(self.time_min))
        if self.time_max is not None:
            predicates.append(TimeAtMost(self.time_max))
        return predicates


def favorites_count_column():
    return (
        select(func.count(UserFavoriteRecipe.id))
        .where(UserFavoriteRecipe.recipe_id == Recipe.id)
        .correlate(Recipe)
        .scalar_subquery()
        .label("favorites_count")
    )


def _with_lookups(stmt: Select) -> Select:
    return (
        stmt.outerjoin(Category, Recipe.category_id == Category.id)
        .outerjoin(Area, Recipe.area_id == Area.id)
    )


def recipe_card_statement(favorites_count=None) -> Select:
    """Recipe rows with category/area names, owner and favorites count."""
    if favorites_count is None:
        favorites_count = favorites_count_column()
    stmt = select(
        Recipe.id,
        Recipe.title,
        Recipe.description,
        Recipe.thumb,
        Recipe.time,
        Category.name.label("category"),
        Area.name.label("area"),
        User.name.label("owner_name"),
        User.avatar.label("owner_avatar"),
        favorites_count,
    ).select_from(Recipe)
    return _with_lookups(stmt).outerjoin(User, Recipe.owner_id == User.id)


class RecipeSearch:
    """Page + count statements for one set of predicates."""

    def __init__(self, predicates: list[Predicate]) -> None:
        self.predicates = list(predicates)

    @classmethod
    def from_filters(cls, filters: RecipeFilters) -> "RecipeSearch":
        return cls(filters.predicates())

    def _clauses(self) -> list[ColumnElement[bool]]:
        return [p.clause() for p in self.predicates]

    def page_statement(self) -> Select:
        """Newest first; limit/offset are applied by the caller."""
        return (
            recipe_card_statement()
            .where(*self._clauses())
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        )

    def count_statement(self) -> Select:
        stmt = select(func.count(Recipe.id)).select_from(Recipe)
        return _with_lookups(stmt).where(*self._clauses())


def popular_statement(limit: int) -> Select:
    favorites_count = favorites_count_column()
    stmt = recipe_card_statement(favorites_count)
    return stmt.order_by(
        favorites_count.desc(),
        Recipe.created_at.desc(),
        Recipe.id.desc(),
    ).limit(limit)


def own_recipes_statements(owner_id: int) -> tuple[Select, Select]:
    stmt = (
        _with_lookups(
            select(
                Recipe.id,
                Recipe.title,
                Recipe.description,
                Recipe.thumb,
                Recipe.time,
                Category.name.label("category"),
                Area.name.label("area"),
                favorites_count_column(),
            ).select_from(Recipe)
        )
        .where(Recipe.owner_id == owner_id)
        .order_by(Recipe.created_at.desc(), Recipe.id.desc())
    )
    count_stmt = select(func.count(Recipe.id)).where(Recipe.owner_id == owner_id)
    return stmt, count_stmt


def favorite_recipes_statements(user_id: int) -> tuple[Select, Select]:
    stmt = (
        select(
            Recipe.id,
            Recipe.title,
            Recipe.description,
            Recipe.thumb,
            Recipe.time,
            Category.name.label("category"),
            Area.name.label("area"),
            User.name.label("owner_name"),
            User.avatar.label("owner_avatar"),
            UserFavoriteRecipe.created_at.label("favorited_at"),
        )
        .select_from(UserFavoriteRecipe)
        .join(Recipe, UserFavoriteRecipe.recipe_id == Recipe.id)
        .outerjoin(Category, Recipe.category_id == Category.id)
        .outerjoin(Area, Recipe.area_id == Area.id)
        .outerjoin(User, Recipe.owner_id == User.id)
        .where(UserFavoriteRecipe.user_id == user_id)
        .order_by(UserFavoriteRecipe.created_at.desc(), UserFavoriteRecipe.id.desc())
    )
    count_stmt = select(func.count(UserFavoriteRecipe.id)).where(UserFavoriteRecipe.user_id == user_id)
    return stmt, count_stmt
