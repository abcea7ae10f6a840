"""Domain exceptions for the StorePulse application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class StorePulseException(Exception):
    """Base exception for all StorePulse application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error envelope used in API responses."""
        body: dict[str, Any] = {
            "success": False,
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(StorePulseException):
    """Raised when input validation fails outside request parsing (e.g. date range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(StorePulseException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(StorePulseException):
    """Raised when the user lacks the membership or role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'store', 'member').
            action: Optional action that was attempted (e.g. 'create', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class StoreLimitExceededException(StorePulseException):
    """Raised when a company is at or above its plan's store limit.

    Kept distinct from validation errors so clients can offer an upgrade path.
    """

    def __init__(self, current_count: int, limit: int, plan: str) -> None:
        super().__init__(
            f"Store limit reached ({limit}). Upgrade your plan to add more stores.",
            "STORE_LIMIT_REACHED",
            {
                "currentCount": current_count,
                "limit": limit,
                "plan": plan,
                "upgradeRequired": True,
            },
        )


class CompanyNotFoundException(StorePulseException):
    """Raised when a requested company is not found."""

    def __init__(self, company_id: str) -> None:
        super().__init__(
            f"Company not found: {company_id}",
            "COMPANY_NOT_FOUND",
            {"company_id": company_id},
        )


class ResourceNotFoundException(StorePulseException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'store', 'member').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class EmailAlreadyRegisteredException(StorePulseException):
    """Raised when registering with an email that already has an account."""

    def __init__(self) -> None:
        super().__init__("Email is already registered", "EMAIL_ALREADY_REGISTERED")


class MemberAlreadyExistsException(StorePulseException):
    """Raised when inviting an email that is already an accepted member."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "This email is already a member of the company",
            "MEMBER_ALREADY_EXISTS",
            {"email": email},
        )


class InviteAlreadyPendingException(StorePulseException):
    """Raised when inviting an email that already has a pending invitation."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "An invitation has already been sent to this email",
            "INVITE_ALREADY_PENDING",
            {"email": email},
        )


class InvalidInviteException(StorePulseException):
    """Raised when an invite token is unknown, used, or belongs to another email."""

    def __init__(self, message: str = "Invalid or expired invitation") -> None:
        super().__init__(message, "INVALID_INVITE")


class StoreAlreadyConnectedException(StorePulseException):
    """Raised when a company already has a store with the same URL."""

    def __init__(self, url: str) -> None:
        super().__init__(
            "A store with this URL is already connected",
            "STORE_ALREADY_CONNECTED",
            {"url": url},
        )


class StoreConnectionException(StorePulseException):
    """Raised when the store API rejects the supplied URL or credentials."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason, "STORE_CONNECTION_FAILED")


class StoreApiException(StorePulseException):
    """Raised when the external store API fails while reading data."""

    def __init__(self, store_id: str | None, reason: str) -> None:
        details = {"store_id": store_id} if store_id else {}
        super().__init__(f"Store API request failed: {reason}", "STORE_API_ERROR", details)


class CacheUnavailableException(StorePulseException):
    """Raised at startup when the cache backend cannot be reached."""

    def __init__(self, host: str, port: int) -> None:
        super().__init__(
            f"Cache backend unreachable at {host}:{port}",
            "CACHE_UNAVAILABLE",
            {"host": host, "port": port},
        )


class CredentialException(StorePulseException):
    """Raised when stored store credentials cannot be decrypted."""

    def __init__(self, message: str = "Credential operation failed") -> None:
        super().__init__(message, "CREDENTIAL_ERROR")


class InvalidPasswordResetTokenException(StorePulseException):
    """Raised when a password reset token is unknown, used, or expired."""

    def __init__(self) -> None:
        super().__init__(
            "Password reset link is invalid or has expired",
            "INVALID_RESET_TOKEN",
        )
