"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.company import Company
from app.infrastructure.persistence.models.company_member import CompanyMember
from app.infrastructure.persistence.models.mixins import (
    CompanyMixin,
    CompanyScopedModel,
    CuidMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from app.infrastructure.persistence.models.store import Store
from app.infrastructure.persistence.models.user import User

__all__ = [
    "Company",
    "CompanyMember",
    "PasswordResetToken",
    "Store",
    "User",
    "CompanyMixin",
    "CompanyScopedModel",
    "CuidMixin",
    "TimestampMixin",
]
