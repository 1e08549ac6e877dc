from fastapi import APIRouter
from . import auth, users, recipes, categories, areas, ingredients, testimonials

router = APIRouter(prefix="/api")

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(recipes.router, prefix="/recipes", tags=["recipes"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(areas.router, prefix="/areas", tags=["areas"])
router.include_router(ingredients.router, prefix="/ingredients", tags=["ingredients"])
router.include_router(testimonials.router, prefix="/testimonials", tags=["testimonials"])
