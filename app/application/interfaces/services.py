"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.store import ConnectionTestResult, StoreCredentials


class INotificationService(Protocol):
    """Protocol for account notifications (invitations, password resets)."""

    async def send_invitation(
        self,
        to_email: str,
        company_name: str,
        role: str,
        token: str,
        inviter_name: str | None = None,
    ) -> None: ...

    async def send_password_reset(
        self,
        to_email: str,
        name: str,
        token: str,
        expires_in_minutes: int,
    ) -> None: ...


class ICredentialCipher(Protocol):
    """Protocol for encrypting store API credentials at rest."""

    def encrypt(self, plaintext: str) -> str: ...

    def decrypt(self, ciphertext: str) -> str: ...


class IStoreApiClient(Protocol):
    """Protocol for a read-only client bound to one store."""

    async def test_connection(self) -> ConnectionTestResult: ...

    async def list_orders(self, after: datetime, before: datetime) -> list[dict[str, Any]]: ...

    async def list_products(self) -> list[dict[str, Any]]: ...


class IStoreApiClientFactory(Protocol):
    """Builds a store API client from plaintext credentials."""

    def __call__(
        self, credentials: StoreCredentials, store_id: str | None = None
    ) -> IStoreApiClient: ...
