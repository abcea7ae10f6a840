"""Application services: auth, company, plan, store, report."""

from app.application.services.auth_service import AuthService
from app.application.services.company_service import CompanyService
from app.application.services.plan_service import PlanService
from app.application.services.report_service import ReportService
from app.application.services.store_service import StoreService

__all__ = [
    "AuthService",
    "CompanyService",
    "PlanService",
    "ReportService",
    "StoreService",
]
