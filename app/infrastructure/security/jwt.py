"""JWT access tokens for authentication.

Tokens carry the user id in ``sub``. Secret and algorithm come from
app.core.config; lifetime is the default access TTL or, for "remember me"
logins, remember_me_expire_days.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings


def access_token_lifetime(remember_me: bool = False) -> timedelta:
    """Return the token lifetime for a normal or "remember me" login."""
    settings = get_settings()
    if remember_me:
        return timedelta(days=settings.remember_me_expire_days)
    return timedelta(minutes=settings.access_token_expire_minutes)


def create_access_token(
    user_id: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed JWT for user_id.

    Args:
        user_id: Subject of the token.
        expires_delta: Optional TTL; else uses access_token_lifetime().
        extra_claims: Additional claims (e.g. email).

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(UTC)
    claims: dict[str, Any] = dict(extra_claims or {})
    claims["sub"] = user_id
    claims["iat"] = now
    claims["exp"] = now + (expires_delta or access_token_lifetime())
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If token is invalid, expired, or missing sub/exp.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
