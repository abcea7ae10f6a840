"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import SortOrder

if TYPE_CHECKING:
    from app.application.dtos.company import CompanyResult, MemberResult
    from app.application.dtos.store import StoreResult
    from app.application.dtos.user import PasswordResetResult, UserResult


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None: ...

    async def get_by_email(self, email: str) -> UserResult | None: ...

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the active user when the credentials match."""

    async def check_password(self, user_id: str, password: str) -> bool: ...

    async def create_user(self, email: str, name: str, password: str) -> UserResult: ...

    async def update_profile(
        self,
        user_id: str,
        *,
        name: str | None = None,
        password: str | None = None,
    ) -> UserResult | None: ...

    async def set_current_company(self, user_id: str, company_id: str | None) -> None: ...


class IPasswordResetRepository(Protocol):
    """Protocol for one-time password reset tokens (stored hashed)."""

    async def create_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> PasswordResetResult: ...

    async def get_valid(self, token_hash: str) -> PasswordResetResult | None: ...

    async def mark_used(self, token_id: str) -> None: ...


class ICompanyRepository(Protocol):
    """Protocol for company repository (DIP)."""

    async def get_by_id(self, company_id: str) -> CompanyResult | None: ...

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool: ...

    async def create_company(self, name: str, slug: str) -> CompanyResult: ...

    async def update_company(
        self, company_id: str, changes: dict[str, Any]
    ) -> CompanyResult | None: ...

    async def list_for_user(self, user_id: str) -> list[CompanyResult]:
        """Companies where the user is an accepted member, with the user's role."""


class ICompanyMemberRepository(Protocol):
    """Protocol for memberships and invitations."""

    async def get_by_id(self, member_id: str) -> MemberResult | None: ...

    async def get_membership(self, company_id: str, user_id: str) -> MemberResult | None:
        """Return the accepted membership of user in company."""

    async def get_by_email(self, company_id: str, email: str) -> MemberResult | None: ...

    async def get_by_invite_token(self, token: str) -> MemberResult | None: ...

    async def list_members(
        self, company_id: str, skip: int = 0, limit: int = 20
    ) -> tuple[list[MemberResult], int]: ...

    async def add_owner(self, company_id: str, user_id: str, email: str) -> MemberResult: ...

    async def upsert_invite(
        self, company_id: str, email: str, role: str, token: str
    ) -> MemberResult: ...

    async def accept_invite(self, member_id: str, user_id: str) -> MemberResult | None: ...

    async def remove(self, member_id: str) -> bool: ...


class IStoreRepository(Protocol):
    """Protocol for store repository; every call is company-scoped."""

    async def get_for_company(self, company_id: str, store_id: str) -> StoreResult | None: ...

    async def count_for_company(self, company_id: str) -> int: ...

    async def url_exists(
        self, company_id: str, url: str, exclude_id: str | None = None
    ) -> bool: ...

    async def create_store(
        self,
        company_id: str,
        name: str,
        url: str,
        encrypted_key: str,
        encrypted_secret: str,
    ) -> StoreResult: ...

    async def list_for_company(
        self,
        company_id: str,
        skip: int = 0,
        limit: int = 20,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[list[StoreResult], int]: ...

    async def list_active(self, company_id: str) -> list[StoreResult]: ...

    async def update_store(
        self, company_id: str, store_id: str, changes: dict[str, Any]
    ) -> StoreResult | None: ...

    async def delete_store(self, company_id: str, store_id: str) -> bool: ...

    def after_commit(self, callback: Callable[[], Awaitable[None]]) -> None: ...
