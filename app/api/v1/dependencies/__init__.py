"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, infrastructure, application
services, and auth/company guards. Routes import from here only.
"""

from .auth import (
    CompanyManager,
    CompanyMember,
    CompanyOwner,
    CompanyReader,
    CurrentUser,
    ReportReader,
    get_current_user,
    get_current_user_optional,
    require_company_member,
    require_company_role,
    require_report_access,
)
from .common import get_pagination, get_report_query
from .db import get_member_repo, get_user_repo
from .infra import (
    get_cache,
    get_credential_cipher,
    get_http_client,
    get_notification_service,
    get_store_client_factory,
)
from .services import (
    get_auth_service,
    get_company_service,
    get_plan_service,
    get_report_service,
    get_store_service,
)

__all__ = [
    "CompanyManager",
    "CompanyMember",
    "CompanyOwner",
    "CompanyReader",
    "CurrentUser",
    "ReportReader",
    "get_auth_service",
    "get_cache",
    "get_company_service",
    "get_credential_cipher",
    "get_current_user",
    "get_current_user_optional",
    "get_http_client",
    "get_member_repo",
    "get_notification_service",
    "get_pagination",
    "get_plan_service",
    "get_report_query",
    "get_report_service",
    "get_store_client_factory",
    "get_store_service",
    "get_user_repo",
    "require_company_member",
    "require_company_role",
    "require_report_access",
]
