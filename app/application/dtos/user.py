"""DTOs for account use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: str
    email: str
    name: str
    is_active: bool
    current_company_id: str | None = None


@dataclass(frozen=True)
class AccessToken:
    """Issued bearer token and its lifetime in seconds."""

    access_token: str
    expires_in: int
    token_type: str = "bearer"


@dataclass(frozen=True)
class PasswordResetResult:
    """Stored password reset token (hash only)."""

    id: str
    user_id: str
    expires_at: datetime
    used_at: datetime | None = None
