"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses (SRP, OCP for adding new handlers).
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import StorePulseException
from app.shared.messages import PYDANTIC_TYPE_CODES, resolve_locale, translate
from app.shared.validation import RULE_VIOLATION

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "STORE_CONNECTION_FAILED": 400,
    "INVALID_INVITE": 400,
    "INVALID_RESET_TOKEN": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "STORE_LIMIT_REACHED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "COMPANY_NOT_FOUND": 404,
    "EMAIL_ALREADY_REGISTERED": 409,
    "MEMBER_ALREADY_EXISTS": 409,
    "INVITE_ALREADY_PENDING": 409,
    "STORE_ALREADY_CONNECTED": 409,
    "STORE_API_ERROR": 502,
    "CREDENTIAL_ERROR": 500,
    "CACHE_UNAVAILABLE": 503,
}


def status_for(exc: StorePulseException) -> int:
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _field_name(loc: Sequence[Any]) -> str:
    """Dotted field path without the request part prefix (body/query/path)."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)


def localize_errors(errors: Sequence[dict[str, Any]], locale: str) -> list[dict[str, str]]:
    """Flatten pydantic errors into one localized entry per failed rule."""
    result: list[dict[str, str]] = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        ctx = error.get("ctx") or {}
        if error.get("type") == RULE_VIOLATION and ctx.get("failures"):
            for failure in ctx["failures"]:
                code = failure["code"]
                message = translate(code, locale, failure.get("params")) or code
                result.append({"field": field, "code": code, "message": message})
            continue
        code = PYDANTIC_TYPE_CODES.get(str(error.get("type")), "invalid_value")
        params = {"choices": ctx["expected"]} if "expected" in ctx else None
        message = translate(code, locale, params) or str(error.get("msg"))
        result.append({"field": field, "code": code, "message": message})
    return result


def _storepulse_exception_handler(
    request: Request, exc: StorePulseException
) -> JSONResponse:
    """Return JSON from StorePulseException.to_dict() with appropriate status code."""
    status = status_for(exc)
    if status >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with one localized message per failed rule."""
    locale = resolve_locale(
        request.headers.get("accept-language"), get_settings().default_locale
    )
    errors = localize_errors(exc.errors(), locale)
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "VALIDATION_ERROR",
            "message": errors[0]["message"] if errors else "Request validation failed",
            "errors": errors,
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 in the error envelope instead of SlowAPI's plain body."""
    logger.info("Rate limit hit on %s: %s", request.url.path, exc.detail)
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": "RATE_LIMIT_EXCEEDED",
            "message": f"Too many requests: {exc.detail}",
        },
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: StorePulseException (and
    subclasses), RequestValidationError, RateLimitExceeded,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(StorePulseException, _storepulse_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
