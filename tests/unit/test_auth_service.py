"""AuthService unit tests with mocked repositories and notifier."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.user import PasswordResetResult, UserResult
from app.application.services.auth_service import AuthService
from app.domain.exceptions import (
    AuthenticationException,
    EmailAlreadyRegisteredException,
    InvalidPasswordResetTokenException,
)
from app.infrastructure.security.jwt import verify_token
from app.infrastructure.security.password import hash_reset_token

USER = UserResult(id="u1", email="alice@example.com", name="Alice", is_active=True)


@pytest.fixture
def user_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_email = AsyncMock(return_value=None)
    repo.create_user = AsyncMock(return_value=USER)
    repo.authenticate = AsyncMock(return_value=USER)
    repo.update_profile = AsyncMock(return_value=USER)
    repo.check_password = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def reset_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(user_repo, reset_repo, notifier, settings) -> AuthService:
    return AuthService(user_repo, reset_repo, notifier, settings)


async def test_register_returns_token_for_new_user(service, user_repo):
    user, token = await service.register("alice@example.com", "Alice", "Secret1!")

    assert user.id == "u1"
    assert verify_token(token.access_token)["sub"] == "u1"
    user_repo.create_user.assert_awaited_once_with(
        email="alice@example.com", name="Alice", password="Secret1!"
    )


async def test_register_duplicate_email(service, user_repo):
    user_repo.get_by_email.return_value = USER
    with pytest.raises(EmailAlreadyRegisteredException):
        await service.register("alice@example.com", "Alice", "Secret1!")
    user_repo.create_user.assert_not_awaited()


async def test_login_remember_me_extends_lifetime(service, settings):
    _, short = await service.login("alice@example.com", "Secret1!")
    _, long = await service.login("alice@example.com", "Secret1!", remember_me=True)

    assert short.expires_in == settings.access_token_expire_minutes * 60
    assert long.expires_in == settings.remember_me_expire_days * 86400


async def test_login_failure(service, user_repo):
    user_repo.authenticate.return_value = None
    with pytest.raises(AuthenticationException):
        await service.login("alice@example.com", "wrong")


async def test_forgot_password_unknown_email_is_silent(service, reset_repo, notifier):
    await service.forgot_password("ghost@example.com")
    reset_repo.create_token.assert_not_awaited()
    notifier.send_password_reset.assert_not_awaited()


async def test_forgot_password_stores_hash_and_mails_raw_token(
    service, user_repo, reset_repo, notifier
):
    user_repo.get_by_email.return_value = USER

    await service.forgot_password("alice@example.com")

    user_id, token_hash, expires_at = reset_repo.create_token.call_args.args
    raw = notifier.send_password_reset.call_args.kwargs["token"]
    assert user_id == "u1"
    assert token_hash == hash_reset_token(raw)
    assert token_hash != raw
    assert expires_at > datetime.now(UTC)


async def test_reset_password_invalid_token(service, reset_repo, user_repo):
    reset_repo.get_valid = AsyncMock(return_value=None)
    with pytest.raises(InvalidPasswordResetTokenException):
        await service.reset_password("bogus", "NewPass1!")
    user_repo.update_profile.assert_not_awaited()


async def test_reset_password_marks_token_used(service, reset_repo, user_repo):
    record = PasswordResetResult(
        id="r1", user_id="u1", expires_at=datetime.now(UTC) + timedelta(minutes=5)
    )
    reset_repo.get_valid = AsyncMock(return_value=record)

    await service.reset_password("raw-token", "NewPass1!")

    reset_repo.get_valid.assert_awaited_once_with(hash_reset_token("raw-token"))
    user_repo.update_profile.assert_awaited_once_with("u1", password="NewPass1!")
    reset_repo.mark_used.assert_awaited_once_with("r1")


async def test_update_profile_new_password_requires_current(service, user_repo):
    with pytest.raises(AuthenticationException):
        await service.update_profile("u1", new_password="NewPass1!")
    user_repo.update_profile.assert_not_awaited()


async def test_update_profile_wrong_current_password(service, user_repo):
    user_repo.check_password.return_value = False
    with pytest.raises(AuthenticationException):
        await service.update_profile("u1", current_password="nope", new_password="NewPass1!")


async def test_update_profile_name_only(service, user_repo):
    await service.update_profile("u1", name="Alicia")
    user_repo.check_password.assert_not_awaited()
    user_repo.update_profile.assert_awaited_once_with("u1", name="Alicia", password=None)
