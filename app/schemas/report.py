"""Report API schemas: query parameters and the report envelope payload."""

from datetime import datetime
from typing import Any

from app.domain.enums import ReportNamespace
from app.schemas.common import CamelModel, DateRangeParams


class ReportQuery(DateRangeParams):
    """Report query: date range plus an optional single-store filter."""

    store_id: str | None = None


class ReportResponse(CamelModel):
    """Aggregated report for one namespace over a resolved date range."""

    namespace: ReportNamespace
    period: str
    start: datetime
    end: datetime
    store_ids: list[str]
    generated_at: datetime
    data: dict[str, Any]
