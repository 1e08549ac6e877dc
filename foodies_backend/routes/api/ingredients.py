"""GET /api/ingredients: every known ingredient, used by the recipe form."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...config.database import get_db
from ...models.ingredient import Ingredient
from ...schemas.common import DataResponse
from ...schemas.lookup import LookupItem

router = APIRouter()


@router.get("", response_model=DataResponse[list[LookupItem]], summary="List ingredients by name")
async def list_ingredients(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(select(Ingredient.id, Ingredient.name).order_by(Ingredient.name.asc()))
    return DataResponse(data=[LookupItem(id=r.id, name=r.name) for r in result.all()])
