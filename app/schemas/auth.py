"""Auth API schemas: register, login, password reset, profile."""

from typing import Annotated

from pydantic import Field, StringConstraints

from app.schemas.common import CamelModel
from app.shared.validation import (
    EMAIL_RULES,
    NAME_RULES,
    PROFILE_PASSWORD_RULES,
    REGISTER_PASSWORD_RULES,
    enforce,
    not_blank,
)

Email = Annotated[str, StringConstraints(strip_whitespace=True), enforce(*EMAIL_RULES)]
PersonName = Annotated[str, StringConstraints(strip_whitespace=True), enforce(*NAME_RULES)]


class ForgotPasswordRequest(CamelModel):
    """Request body for POST /auth/forgot-password."""

    email: Email


class LoginRequest(CamelModel):
    """Request body for login. rememberMe extends the token lifetime."""

    email: Email
    password: Annotated[str, enforce(not_blank())]
    remember_me: bool = False


class RegisterRequest(CamelModel):
    """Request body for public registration.

    Password length (8-50) and composition (lower, upper, digit) are
    checked independently; both failures are reported together.
    """

    email: Email
    name: PersonName
    password: Annotated[str, enforce(*REGISTER_PASSWORD_RULES)]


class ResetPasswordRequest(CamelModel):
    """Request body for POST /auth/reset-password (token from the reset email)."""

    token: Annotated[str, enforce(not_blank())]
    new_password: Annotated[str, enforce(*REGISTER_PASSWORD_RULES)]


class UpdateProfileRequest(CamelModel):
    """Request body for PUT /auth/me (partial).

    newPassword is only checked when present; changing it requires
    currentPassword, verified by AuthService.
    """

    name: PersonName | None = None
    current_password: str | None = None
    new_password: Annotated[str, enforce(*PROFILE_PASSWORD_RULES)] | None = None


class TokenResponse(CamelModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class UserResponse(CamelModel):
    """Current user profile."""

    id: str
    email: str
    name: str
    is_active: bool
    current_company_id: str | None = None


class AuthResponse(CamelModel):
    """Register/login payload: the account plus its access token."""

    user: UserResponse
    token: TokenResponse
