"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.company_repo import CompanyRepository
from app.infrastructure.persistence.repositories.member_repo import (
    CompanyMemberRepository,
)
from app.infrastructure.persistence.repositories.password_reset_repo import (
    PasswordResetTokenRepository,
)
from app.infrastructure.persistence.repositories.store_repo import StoreRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "CompanyMemberRepository",
    "CompanyRepository",
    "PasswordResetTokenRepository",
    "StoreRepository",
    "UserRepository",
]
