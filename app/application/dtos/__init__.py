"""Application DTOs (no ORM dependency)."""

from app.application.dtos.company import CompanyResult, InviteResult, MemberResult
from app.application.dtos.report import DateRange
from app.application.dtos.store import (
    ConnectionTestResult,
    StoreCredentials,
    StoreResult,
)
from app.application.dtos.user import AccessToken, PasswordResetResult, UserResult

__all__ = [
    "AccessToken",
    "CompanyResult",
    "ConnectionTestResult",
    "DateRange",
    "InviteResult",
    "MemberResult",
    "PasswordResetResult",
    "StoreCredentials",
    "StoreResult",
    "UserResult",
]
