"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CacheUnavailableException,
    ResourceNotFoundException,
    StoreApiException,
    StoreLimitExceededException,
    StorePulseException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base StorePulseException uses class name as error_code when not provided."""
    exc = StorePulseException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "StorePulseException"
    assert exc.details == {}


def test_to_dict_envelope() -> None:
    exc = StorePulseException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "success": False,
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }
    assert "details" not in StorePulseException("x").to_dict()


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="startDate")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "startDate"}
    assert ValidationException("Invalid").details == {}


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_with_resource_and_action() -> None:
    """AuthorizationException with resource and action builds message and details."""
    exc = AuthorizationException(resource="store", action="delete")
    assert exc.message == "Permission denied: delete on store"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"resource": "store", "action": "delete"}


def test_store_limit_exceeded_carries_upgrade_details() -> None:
    exc = StoreLimitExceededException(current_count=2, limit=2, plan="FREE")
    assert exc.error_code == "STORE_LIMIT_REACHED"
    assert exc.details == {
        "currentCount": 2,
        "limit": 2,
        "plan": "FREE",
        "upgradeRequired": True,
    }


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("store", "s1")
    assert exc.message == "store not found: s1"
    assert exc.details == {"resource_type": "store", "resource_id": "s1"}


def test_store_api_exception_without_store_id() -> None:
    exc = StoreApiException(None, "HTTP 500")
    assert exc.error_code == "STORE_API_ERROR"
    assert exc.details == {}
    assert "HTTP 500" in exc.message


def test_cache_unavailable() -> None:
    exc = CacheUnavailableException("redis.internal", 6380)
    assert exc.error_code == "CACHE_UNAVAILABLE"
    assert exc.details == {"host": "redis.internal", "port": 6380}
