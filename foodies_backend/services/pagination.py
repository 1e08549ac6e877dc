"""Page/limit handling and the pagination block of list responses."""
import math
from dataclasses import dataclass
from typing import Any, Sequence

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.common import Pagination


@dataclass(frozen=True)
class PageParams:
    page: int = 1
    limit: int = 12

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit) if limit > 0 else 0


def build_pagination(params: PageParams, total_items: int) -> Pagination:
    return Pagination(
        currentPage=params.page,
        totalPages=total_pages(total_items, params.limit),
        totalItems=total_items,
        itemsPerPage=params.limit,
    )


async def fetch_page(
    db: AsyncSession,
    stmt: Select,
    count_stmt: Select,
    params: PageParams,
) -> tuple[Sequence[Any], Pagination]:
    """Run the page query and its COUNT query, return rows + pagination.

    Both statements go through the request's session, which cannot run two
    statements at once, so they are awaited one after the other.
    """
    result = await db.execute(stmt.limit(params.limit).offset(params.offset))
    rows = result.all()
    total = (await db.execute(count_stmt)).scalar_one()
    return rows, build_pagination(params, int(total or 0))
