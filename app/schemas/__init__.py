"""Pydantic request/response schemas for the API."""

from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    UpdateProfileRequest,
    UserResponse,
)
from app.schemas.common import ApiResponse, PaginationMeta, PaginationParams
from app.schemas.company import (
    ChangePlanRequest,
    CompanyResponse,
    CreateCompanyRequest,
    InviteMemberRequest,
    MemberResponse,
    PlanUsageResponse,
    UpdateCompanyRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.report import ReportQuery, ReportResponse
from app.schemas.store import (
    ConnectionTestRequest,
    CreateStoreRequest,
    StoreResponse,
    UpdateStoreRequest,
)

__all__ = [
    "ApiResponse",
    "AuthResponse",
    "ChangePlanRequest",
    "CompanyResponse",
    "ConnectionTestRequest",
    "CreateCompanyRequest",
    "CreateStoreRequest",
    "ForgotPasswordRequest",
    "HealthResponse",
    "InviteMemberRequest",
    "LoginRequest",
    "MemberResponse",
    "PaginationMeta",
    "PaginationParams",
    "PlanUsageResponse",
    "RegisterRequest",
    "ReportQuery",
    "ReportResponse",
    "ResetPasswordRequest",
    "StoreResponse",
    "TokenResponse",
    "UpdateCompanyRequest",
    "UpdateProfileRequest",
    "UserResponse",
]
