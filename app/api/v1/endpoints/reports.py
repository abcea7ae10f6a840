"""Report API: per-company aggregates, one namespace per route segment.

Mounted under /companies/{company_id}/reports. Results are cached per
company and query; store writes invalidate them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import ReportReader, get_report_query, get_report_service
from app.application.services import ReportService
from app.domain.enums import ReportNamespace
from app.schemas.common import ApiResponse, ok
from app.schemas.report import ReportQuery, ReportResponse

router = APIRouter()


@router.get("/{namespace}", response_model=ApiResponse[ReportResponse])
async def get_report(
    company_id: str,
    namespace: ReportNamespace,
    membership: ReportReader,
    query: Annotated[ReportQuery, Depends(get_report_query)],
    reports: Annotated[ReportService, Depends(get_report_service)],
):
    """Aggregate over the company's active stores (or one store via storeId)."""
    payload = await reports.get_report(
        company_id,
        namespace,
        period=query.period,
        start_date=query.start_date,
        end_date=query.end_date,
        store_id=query.store_id,
    )
    return ok(ReportResponse.model_validate(payload))
