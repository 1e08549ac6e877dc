from .common import MessageResponse, DataResponse, DataMessageResponse, ErrorResponse, Pagination
from .auth import RegisterRequest, LoginRequest, UserPublic, AuthPayload
from .user import UserProfile, OwnProfile, ProfileUpdate, AvatarPayload, FollowUser
from .recipe import (
    IngredientMeasure,
    RecipeCreate,
    RecipeCreated,
    RecipeCard,
    OwnRecipeCard,
    FavoriteRecipeCard,
    RecipePage,
    RecipeIngredientItem,
    RecipeDetail,
)
from .lookup import LookupItem, TestimonialItem

__all__ = [
    "MessageResponse",
    "DataResponse",
    "DataMessageResponse",
    "ErrorResponse",
    "Pagination",
    "RegisterRequest",
    "LoginRequest",
    "UserPublic",
    "AuthPayload",
    "UserProfile",
    "OwnProfile",
    "ProfileUpdate",
    "AvatarPayload",
    "FollowUser",
    "IngredientMeasure",
    "RecipeCreate",
    "RecipeCreated",
    "RecipeCard",
    "OwnRecipeCard",
    "FavoriteRecipeCard",
    "RecipePage",
    "RecipeIngredientItem",
    "RecipeDetail",
    "LookupItem",
    "TestimonialItem",
]
