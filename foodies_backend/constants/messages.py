"""Response messages and validation limits shared across routes."""

# Auth
INVALID_CREDENTIALS = "Invalid email or password"
USER_ALREADY_EXISTS = "User with this email already exists"
TOKEN_REQUIRED = "Access denied. No token provided."
TOKEN_INVALID = "Token is not valid."
TOKEN_EXPIRED = "Token expired"

# Users
USER_NOT_FOUND = "User not found"
CANNOT_FOLLOW_SELF = "Cannot follow yourself"
ALREADY_FOLLOWING = "You are already following this user"
NOT_FOLLOWING = "You are not following this user"
EMAIL_TAKEN = "Email is already in use"
NOTHING_TO_UPDATE = "Provide a name or email to update"

# Recipes
RECIPE_NOT_FOUND = "Recipe not found"
RECIPE_ALREADY_FAVORITE = "Recipe already in favorites"
RECIPE_NOT_FAVORITE = "Recipe not found in favorites"
RECIPE_NOT_OWNED = "Recipe not found or you do not have permission to delete it"
CATEGORY_NOT_FOUND = "Category not found"
AREA_NOT_FOUND = "Area not found"
INGREDIENT_NOT_FOUND = "Ingredient not found"

# Validation / uploads
VALIDATION_FAILED = "Validation failed"
FILE_REQUIRED = "File not provided"
FILE_TYPE_INVALID = "Only images are allowed!"
FILE_TOO_LARGE = "File too large"

# Server
SERVER_ERROR = "Server error"
TOO_MANY_REQUESTS = "Too many requests from this IP, please try again later."
ROUTE_NOT_FOUND = "Route not found"

# Success
USER_REGISTERED = "User successfully registered"
LOGIN_SUCCESS = "Login successful"
LOGOUT_SUCCESS = "Logout successful"
PROFILE_UPDATED = "Profile successfully updated"
AVATAR_UPDATED = "Avatar successfully updated"
FOLLOW_SUCCESS = "Successfully followed user"
UNFOLLOW_SUCCESS = "Successfully unfollowed user"
RECIPE_CREATED = "Recipe successfully created"
RECIPE_DELETED = "Recipe successfully deleted"
RECIPE_FAVORITED = "Recipe added to favorites"
RECIPE_UNFAVORITED = "Recipe removed from favorites"

# Validation limits
USER_NAME_MIN_LENGTH = 2
USER_NAME_MAX_LENGTH = 100
USER_EMAIL_MAX_LENGTH = 255
USER_PASSWORD_MIN_LENGTH = 6

RECIPE_TITLE_MIN_LENGTH = 2
RECIPE_TITLE_MAX_LENGTH = 200
RECIPE_DESCRIPTION_MAX_LENGTH = 1000
RECIPE_INSTRUCTIONS_MIN_LENGTH = 10
RECIPE_INSTRUCTIONS_MAX_LENGTH = 5000
RECIPE_TIME_MIN = 1
RECIPE_TIME_MAX = 1440  # 24h in minutes
INGREDIENT_MEASURE_MAX_LENGTH = 100

AVATAR_CONTENT_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif")
AVATAR_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")

POPULAR_DEFAULT_LIMIT = 10
