"""Auth API: register, login, password reset, and current user (get/update me).

Uses only injected dependencies (get_auth_service, get_current_user); no
manual repo construction.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUser, get_auth_service
from app.application.dtos.user import AccessToken, UserResult
from app.application.services import AuthService
from app.core.limiter import limit_auth, limit_password_reset, limit_register, limit_writes
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
from app.schemas.common import ApiResponse, MessageResponse, ok

router = APIRouter()

Auth = Annotated[AuthService, Depends(get_auth_service)]

FORGOT_PASSWORD_MESSAGE = "If an account exists for this email, a reset link has been sent"


def _user_response(user: UserResult) -> UserResponse:
    return UserResponse.model_validate(user, from_attributes=True)


def _auth_response(user: UserResult, token: AccessToken) -> AuthResponse:
    return AuthResponse(
        user=_user_response(user),
        token=TokenResponse.model_validate(token, from_attributes=True),
    )


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=201)
@limit_register
async def register(request: Request, body: RegisterRequest, auth: Auth):
    """Create an account and return it with an access token (public endpoint)."""
    user, token = await auth.register(email=body.email, name=body.name, password=body.password)
    return ok(_auth_response(user, token), message="Account created")


@router.post("/login", response_model=ApiResponse[AuthResponse])
@limit_auth
async def login(request: Request, body: LoginRequest, auth: Auth):
    """Authenticate with email and password; rememberMe extends the token lifetime."""
    user, token = await auth.login(body.email, body.password, remember_me=body.remember_me)
    return ok(_auth_response(user, token))


@router.post("/forgot-password", response_model=ApiResponse[MessageResponse])
@limit_password_reset
async def forgot_password(request: Request, body: ForgotPasswordRequest, auth: Auth):
    """Send a reset link. The response is identical whether or not the account exists."""
    await auth.forgot_password(body.email)
    return ok(MessageResponse(message=FORGOT_PASSWORD_MESSAGE))


@router.post("/reset-password", response_model=ApiResponse[MessageResponse])
@limit_password_reset
async def reset_password(request: Request, body: ResetPasswordRequest, auth: Auth):
    await auth.reset_password(body.token, body.new_password)
    return ok(MessageResponse(message="Password has been reset"))


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(current_user: CurrentUser):
    """Return the currently authenticated user from JWT.

    Requires Authorization: Bearer <token>.
    """
    return ok(_user_response(current_user))


@router.put("/me", response_model=ApiResponse[UserResponse])
@limit_writes
async def update_me(
    request: Request,
    body: UpdateProfileRequest,
    current_user: CurrentUser,
    auth: Auth,
):
    """Update name and/or password. A new password requires currentPassword."""
    user = await auth.update_profile(
        current_user.id,
        name=body.name,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    return ok(_user_response(user), message="Profile updated")
