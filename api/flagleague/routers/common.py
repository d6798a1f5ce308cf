"""Shared helpers for league routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from fastapi import HTTPException, Query, status
from sqlalchemy import Select, func, select

from ..db import AsyncSession
from .schemas.common import Pagination

ModelT = TypeVar("ModelT")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(page=page, limit=limit)


async def paginate(
    session: AsyncSession,
    stmt: Select[Any],
    params: PageParams,
) -> tuple[list[Any], Pagination]:
    """Run ``stmt`` for one page and count the full result set.

    ``stmt`` must already be ordered; scalar rows are returned.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    count = (await session.execute(count_stmt)).scalar() or 0

    result = await session.execute(stmt.offset(params.offset).limit(params.limit))
    rows = list(result.scalars().all())
    return rows, Pagination.build(params.page, params.limit, count)


async def get_or_404(session: AsyncSession, model: type[ModelT], object_id: int, label: str) -> ModelT:
    instance = await session.get(model, object_id)
    if instance is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    return instance


async def ensure_exists(session: AsyncSession, model: type[Any], object_id: int | None, label: str) -> None:
    """Reject references to missing rows with 400."""
    if object_id is None:
        return
    if await session.get(model, object_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} {object_id} does not exist",
        )
