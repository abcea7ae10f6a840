"""Error mapping tests: domain error codes to HTTP status, localized validation errors."""

import pytest
from pydantic import ValidationError

from app.core.exception_handlers import localize_errors, status_for
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    EmailAlreadyRegisteredException,
    InviteAlreadyPendingException,
    ResourceNotFoundException,
    StoreApiException,
    StoreConnectionException,
    StoreLimitExceededException,
    ValidationException,
)
from app.schemas.auth import RegisterRequest


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("bad"), 400),
        (StoreConnectionException("refused"), 400),
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (StoreLimitExceededException(2, 2, "FREE"), 403),
        (ResourceNotFoundException("store", "s1"), 404),
        (EmailAlreadyRegisteredException(), 409),
        (InviteAlreadyPendingException("a@example.com"), 409),
        (StoreApiException("s1", "timeout"), 502),
    ],
)
def test_status_for_domain_errors(exc, status: int) -> None:
    assert status_for(exc) == status


def _register_errors(body: dict) -> list[dict]:
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest.model_validate(body)
    return exc_info.value.errors()


def test_localize_errors_expands_each_rule_failure() -> None:
    errors = _register_errors({"email": "ada@example.com", "name": "Ada", "password": "abc"})
    localized = localize_errors(errors, "en")
    assert [e["code"] for e in localized] == ["password_min_length", "password_composition"]
    assert all(e["field"] == "password" for e in localized)
    assert localized[0]["message"] == "Password must be at least 8 characters"


def test_localize_errors_in_turkish() -> None:
    errors = _register_errors({"email": "bad", "name": "Ada", "password": "Secret123"})
    localized = localize_errors(errors, "tr")
    assert localized == [
        {
            "field": "email",
            "code": "invalid_email",
            "message": "Geçerli bir e-posta adresi giriniz",
        }
    ]


def test_localize_errors_maps_missing_field() -> None:
    errors = _register_errors({"email": "ada@example.com", "name": "Ada"})
    localized = localize_errors(errors, "en")
    assert localized == [
        {"field": "password", "code": "required", "message": "This field is required"}
    ]


def test_localize_errors_strips_request_part_from_location() -> None:
    errors = [{"type": "missing", "loc": ("body", "store", "name"), "msg": "Field required"}]
    assert localize_errors(errors, "en")[0]["field"] == "store.name"
