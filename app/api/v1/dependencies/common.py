"""Shared request parsing dependencies (pagination, report query)."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import Query

from app.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.domain.enums import DatePeriod, SortOrder
from app.schemas.common import PaginationParams
from app.schemas.report import ReportQuery

def get_pagination(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.DESC,
) -> PaginationParams:
    """page (>=1), limit (1..MAX_PAGE_SIZE), sortBy, sortOrder (asc/desc)."""
    return PaginationParams(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

def get_report_query(
    period: Annotated[DatePeriod, Query()] = DatePeriod.LAST_30_DAYS,
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
    store_id: Annotated[str | None, Query(alias="storeId")] = None,
) -> ReportQuery:
    return ReportQuery(
        period=period, start_date=start_date, end_date=end_date, store_id=store_id
    )
