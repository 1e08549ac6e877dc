"""GET /api/testimonials: newest first, with the author's name and avatar."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...config.database import get_db
from ...models.testimonial import Testimonial
from ...models.user import User
from ...schemas.common import DataResponse
from ...schemas.lookup import TestimonialItem

router = APIRouter()


@router.get("", response_model=DataResponse[list[TestimonialItem]], summary="List testimonials")
async def list_testimonials(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(
        select(
            Testimonial.id,
            Testimonial.testimonial,
            Testimonial.created_at,
            User.name.label("owner_name"),
            User.avatar.label("owner_avatar"),
        )
        .join(User, Testimonial.owner_id == User.id)
        .order_by(Testimonial.created_at.desc(), Testimonial.id.desc())
    )
    return DataResponse(data=[TestimonialItem(**r._mapping) for r in result.all()])
