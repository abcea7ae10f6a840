"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, companies, health, reports, stores

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(
    stores.router, prefix="/companies/{company_id}/stores", tags=["stores"]
)
api_router.include_router(
    reports.router, prefix="/companies/{company_id}/reports", tags=["reports"]
)
