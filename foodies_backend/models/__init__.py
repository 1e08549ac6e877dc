from .user import User
from .category import Category
from .area import Area
from .ingredient import Ingredient
from .recipe import Recipe
from .recipe_ingredient import RecipeIngredient
from .user_follow import UserFollow
from .favorite_recipe import UserFavoriteRecipe
from .testimonial import Testimonial

__all__ = [
    "User",
    "Category",
    "Area",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "UserFollow",
    "UserFavoriteRecipe",
    "Testimonial",
]
