"""Domain layer: enums, plan policy, permissions, report aggregates, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    CompanyRole,
    DatePeriod,
    InviteRole,
    InviteStatus,
    PlanType,
    ReportNamespace,
    StoreStatus,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    StoreLimitExceededException,
    StorePulseException,
    ValidationException,
)

__all__ = [
    # Enums
    "CompanyRole",
    "DatePeriod",
    "InviteRole",
    "InviteStatus",
    "PlanType",
    "ReportNamespace",
    "StoreStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ResourceNotFoundException",
    "StoreLimitExceededException",
    "StorePulseException",
    "ValidationException",
]
