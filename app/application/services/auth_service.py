"""Account use cases: register, login, password reset, profile."""

from __future__ import annotations

import logging
from datetime import timedelta

from app.application.dtos.user import AccessToken, UserResult
from app.application.interfaces.repositories import (
    IPasswordResetRepository,
    IUserRepository,
)
from app.application.interfaces.services import INotificationService
from app.core.config import Settings
from app.domain.exceptions import (
    AuthenticationException,
    EmailAlreadyRegisteredException,
    InvalidPasswordResetTokenException,
    ResourceNotFoundException,
)
from app.infrastructure.security.jwt import access_token_lifetime, create_access_token
from app.infrastructure.security.password import generate_reset_token, hash_reset_token
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class AuthService:
    """Registers users, issues tokens, and manages passwords."""

    def __init__(
        self,
        user_repo: IUserRepository,
        reset_repo: IPasswordResetRepository,
        notifier: INotificationService,
        settings: Settings,
    ) -> None:
        self.user_repo = user_repo
        self.reset_repo = reset_repo
        self.notifier = notifier
        self.settings = settings

    def _issue_token(self, user: UserResult, remember_me: bool = False) -> AccessToken:
        lifetime = access_token_lifetime(remember_me)
        token = create_access_token(
            user.id, expires_delta=lifetime, extra_claims={"email": user.email}
        )
        return AccessToken(access_token=token, expires_in=int(lifetime.total_seconds()))

    async def register(self, email: str, name: str, password: str) -> tuple[UserResult, AccessToken]:
        """Create an account and log it in.

        Raises:
            EmailAlreadyRegisteredException: If the email already has an account.
        """
        if await self.user_repo.get_by_email(email):
            raise EmailAlreadyRegisteredException()
        user = await self.user_repo.create_user(email=email, name=name, password=password)
        logger.info("User registered: %s", user.id)
        return user, self._issue_token(user)

    async def login(
        self, email: str, password: str, remember_me: bool = False
    ) -> tuple[UserResult, AccessToken]:
        """Authenticate by email and password.

        Raises:
            AuthenticationException: On unknown email, wrong password, or inactive user.
        """
        user = await self.user_repo.authenticate(email, password)
        if user is None:
            logger.info("Login failed for email domain %s", email.rpartition("@")[2])
            raise AuthenticationException("Invalid email or password")
        return user, self._issue_token(user, remember_me)

    async def forgot_password(self, email: str) -> None:
        """Send a reset link when the account exists. Always succeeds for the caller."""
        user = await self.user_repo.get_by_email(email)
        if user is None or not user.is_active:
            logger.info("Password reset requested for unknown or inactive account")
            return
        raw_token, token_hash = generate_reset_token()
        expires_at = utc_now() + timedelta(minutes=self.settings.password_reset_expire_minutes)
        await self.reset_repo.create_token(user.id, token_hash, expires_at)
        await self.notifier.send_password_reset(
            to_email=user.email,
            name=user.name,
            token=raw_token,
            expires_in_minutes=self.settings.password_reset_expire_minutes,
        )

    async def reset_password(self, token: str, new_password: str) -> None:
        """Redeem a reset token and set the new password.

        Raises:
            InvalidPasswordResetTokenException: If the token is unknown, used, or expired.
        """
        record = await self.reset_repo.get_valid(hash_reset_token(token))
        if record is None:
            raise InvalidPasswordResetTokenException()
        updated = await self.user_repo.update_profile(record.user_id, password=new_password)
        if updated is None:
            raise InvalidPasswordResetTokenException()
        await self.reset_repo.mark_used(record.id)
        logger.info("Password reset completed for user %s", record.user_id)

    async def get_profile(self, user_id: str) -> UserResult:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def update_profile(
        self,
        user_id: str,
        *,
        name: str | None = None,
        current_password: str | None = None,
        new_password: str | None = None,
    ) -> UserResult:
        """Update name and/or password. A new password requires the current one.

        Raises:
            AuthenticationException: If new_password is set and current_password is missing or wrong.
        """
        if new_password is not None:
            if not current_password or not await self.user_repo.check_password(
                user_id, current_password
            ):
                raise AuthenticationException("Current password is incorrect")
        updated = await self.user_repo.update_profile(
            user_id, name=name, password=new_password
        )
        if updated is None:
            raise ResourceNotFoundException("user", user_id)
        return updated
