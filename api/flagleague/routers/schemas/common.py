"""Shared response schemas."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Pagination(BaseModel):
    """Page metadata; ``total`` is the number of pages, ``count`` the number of items."""

    model_config = ConfigDict(populate_by_name=True)

    current: int
    total: int
    pages: int
    count: int
    has_next: bool = Field(alias="hasNext")
    has_prev: bool = Field(alias="hasPrev")

    @classmethod
    def build(cls, page: int, limit: int, count: int) -> "Pagination":
        pages = math.ceil(count / limit) if limit else 0
        return cls(
            current=page,
            total=pages,
            pages=pages,
            count=count,
            has_next=page < pages,
            has_prev=page > 1,
        )


class Page(BaseModel, Generic[T]):
    data: list[T]
    pagination: Pagination


class MessageResponse(BaseModel):
    message: str
