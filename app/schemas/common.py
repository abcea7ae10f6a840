"""Shared API schemas: camelCase base model, response envelope, pagination, date ranges."""

from datetime import date
from math import ceil
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.domain.enums import DatePeriod, SortOrder

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API bodies: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationMeta(CamelModel):
    """Pagination block of the response envelope."""

    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=ceil(total / limit) if limit else 0,
        )


class ApiResponse(CamelModel, Generic[T]):
    """Uniform response envelope for all endpoints."""

    success: bool = True
    data: T | None = None
    message: str | None = None
    meta: PaginationMeta | None = None


class PaginationParams(CamelModel):
    """Pagination query (page, limit, sortBy, sortOrder)."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class DateRangeParams(CamelModel):
    """Date-range query: a named period, or custom with startDate/endDate."""

    period: DatePeriod = DatePeriod.LAST_30_DAYS
    start_date: date | None = None
    end_date: date | None = None


class MessageResponse(CamelModel):
    """Plain confirmation payload (e.g. 'Invitation sent')."""

    message: str


def ok(
    data: T | None = None,
    message: str | None = None,
    meta: PaginationMeta | None = None,
) -> ApiResponse[T]:
    """Wrap data in a successful envelope."""
    return ApiResponse(success=True, data=data, message=message, meta=meta)
