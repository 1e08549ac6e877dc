from . import avatars, pagination, recipe_search, recipes, relationships

__all__ = ["avatars", "pagination", "recipe_search", "recipes", "relationships"]
