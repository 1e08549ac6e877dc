"""GET /api/categories: read-only lookup list."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...config.database import get_db
from ...models.category import Category
from ...schemas.common import DataResponse
from ...schemas.lookup import LookupItem

router = APIRouter()


@router.get("", response_model=DataResponse[list[LookupItem]], summary="List categories by name")
async def list_categories(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(select(Category.id, Category.name).order_by(Category.name.asc()))
    return DataResponse(data=[LookupItem(id=r.id, name=r.name) for r in result.all()])
