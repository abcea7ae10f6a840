"""Account notifications: log-only sender for invitations and password resets."""

from __future__ import annotations

import logging

from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_TOKEN_PREVIEW = 6


def _mask(token: str) -> str:
    return f"{token[:_TOKEN_PREVIEW]}..." if token else ""


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of sending email.

    Use when no SMTP is configured. Production can swap in an SMTP or queue-based implementation.
    """

    async def send_invitation(
        self,
        to_email: str,
        company_name: str,
        role: str,
        token: str,
        inviter_name: str | None = None,
    ) -> None:
        """Log the invitation; no actual email sent."""
        logger.info(
            "Invite notify: would send invitation to %s for company %r as %s",
            to_email,
            company_name,
            role,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Invite notify details: inviter=%r token=%s (at %s)",
                inviter_name,
                _mask(token),
                utc_now().isoformat(),
            )

    async def send_password_reset(
        self,
        to_email: str,
        name: str,
        token: str,
        expires_in_minutes: int,
    ) -> None:
        """Log the password reset mail; no actual email sent."""
        logger.info(
            "Password reset notify: would send reset link to %s (valid %d min)",
            to_email,
            expires_in_minutes,
        )
        logger.debug("Password reset notify: name=%r token=%s", name, _mask(token))
