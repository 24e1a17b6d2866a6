# =============================================================================
# app/exceptions.py - Exception Taxonomy and Error Normalizer
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure that escapes a handler ends up in normalize_exception(), which
# maps it (in priority order) to one status code and the standard envelope:
#
#   field validation      -> 400 with per-field errors
#   uniqueness violation  -> 400 naming the field
#   foreign key violation -> 400
#   expired/invalid token -> 401
#   explicit status code  -> that status
#   anything else         -> 500 (details only outside production)
# =============================================================================

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from core.models import Envelope, FieldError

logger = logging.getLogger(__name__)


class ProdManagerException(Exception):
    """
    Base exception for the ProdManager API.

    All custom exceptions inherit from this class and carry the HTTP status
    the normalizer should answer with.
    """

    def __init__(
        self,
        message: str,
        code: str = "PRODMANAGER_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


# =============================================================================
# Validation Exceptions (400)
# =============================================================================

class RecordValidationError(ProdManagerException):
    """Raised when a record fails field checks below the request validator."""

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        super().__init__(message=message, code="VALIDATION_ERROR", status_code=400)
        self.errors = errors


class ConflictError(ProdManagerException):
    """Raised when a write would duplicate a unique value."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=400,
            details={"field": field} if field else None,
        )
        self.field = field
        self.value = value


class UniqueViolationError(ConflictError):
    """Raised by storage when a unique constraint rejects a write."""

    def __init__(self, field: str, value: Any = None):
        super().__init__(message=f"{field} already exists", field=field, value=value)


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists with this email",
            field="email",
            value=email,
        )


class ForeignKeyViolationError(ProdManagerException):
    """Raised by storage when a referenced record is missing."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__(
            message="Referenced record does not exist",
            code="FOREIGN_KEY_VIOLATION",
            status_code=400,
            details=details,
        )


# =============================================================================
# Auth Exceptions (401 / 403)
# =============================================================================

class AuthenticationError(ProdManagerException):
    """Raised when credentials are missing, wrong or no longer valid."""

    def __init__(self, message: str = "Not authenticated", code: str = "NOT_AUTHENTICATED"):
        super().__init__(message=message, code=code, status_code=401)


class InvalidCredentialsError(AuthenticationError):
    def __init__(self):
        super().__init__(message="Invalid credentials", code="INVALID_CREDENTIALS")


class AccountDeactivatedError(AuthenticationError):
    def __init__(self):
        super().__init__(message="Account is deactivated", code="ACCOUNT_DEACTIVATED")


class AuthorizationError(ProdManagerException):
    """Raised when the principal's role is not allowed on a route."""

    def __init__(self, required_roles: list[str]):
        super().__init__(
            message=f"Access denied. Required role: {' or '.join(required_roles)}",
            code="FORBIDDEN",
            status_code=403,
            details={"required_roles": required_roles},
        )


# =============================================================================
# Lookup Exceptions (404)
# =============================================================================

class NotFoundError(ProdManagerException):
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, code="NOT_FOUND", status_code=404, details=details)


class ProductNotFoundError(NotFoundError):
    """Raised when a product ID doesn't exist."""

    def __init__(self, product_id: int):
        super().__init__(message="Product not found", details={"product_id": product_id})


# =============================================================================
# Storage Exceptions (503)
# =============================================================================

class StorageUnavailableError(ProdManagerException):
    """Raised when the persistence service cannot be reached."""

    def __init__(self, error: str):
        super().__init__(
            message="Database connection failed",
            code="STORAGE_UNAVAILABLE",
            status_code=503,
            details={"error": error},
        )


# =============================================================================
# Error Normalizer
# =============================================================================

def envelope_response(
    status_code: int,
    message: str,
    *,
    success: bool | None = None,
    data: Any = None,
    errors: list[FieldError] | None = None,
    **extra: Any,
) -> JSONResponse:
    """
    Build a JSONResponse carrying the standard envelope.

    success defaults to True for 2xx/3xx statuses and False otherwise.
    """
    if success is None:
        success = status_code < 400
    envelope = Envelope(success=success, message=message, data=data, errors=errors, **extra)
    return JSONResponse(status_code=status_code, content=envelope.to_content())


def field_errors_from_pydantic(errors: list[dict[str, Any]]) -> list[FieldError]:
    """
    Convert pydantic error dicts to field error records.

    The field name is the last string element of the error location, so
    ("body", "price") and ("price",) both become "price".
    """
    records = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if not isinstance(part, int)]
        loc = [part for part in loc if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        message = str(error.get("msg", "Invalid value"))
        # pydantic prefixes custom validator messages
        message = message.removeprefix("Value error, ")
        records.append(FieldError(field=field, message=message, value=error.get("input")))
    return records


def _failure_kind(exc: Exception) -> tuple[int, str, dict[str, Any]]:
    """
    Classify an exception into (status, message, envelope extras).

    Order matters: it mirrors the normalizer's priority list.
    """
    if isinstance(exc, (ValidationError, RequestValidationError)):
        return 400, "Validation failed", {"errors": field_errors_from_pydantic(exc.errors())}

    if isinstance(exc, RecordValidationError):
        return 400, exc.message, {"errors": exc.errors}

    if isinstance(exc, ConflictError):
        errors = [FieldError(field=exc.field, message=exc.message, value=exc.value)] if exc.field else None
        return 400, exc.message, {"errors": errors}

    if isinstance(exc, ForeignKeyViolationError):
        return 400, exc.message, {}

    if isinstance(exc, ExpiredSignatureError):
        return 401, "Token expired", {}

    if isinstance(exc, JWTError):
        return 401, "Invalid token", {}

    if isinstance(exc, ProdManagerException):
        return exc.status_code, exc.message, {}

    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, _http_exception_message(exc), {}

    extras: dict[str, Any] = {}
    if not settings.is_production:
        extras["error"] = str(exc)
        extras["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return 500, "Internal server error", extras


def _http_exception_message(exc: StarletteHTTPException) -> str:
    if isinstance(exc.detail, str):
        return exc.detail
    return "Request failed"


async def normalize_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Terminal error stage: turn any failure into the standard envelope.

    Registered for every exception type the framework can surface, so no
    framework-default error page ever reaches a client.
    """
    status_code, message, extras = _failure_kind(exc)

    if status_code >= 500:
        logger.exception(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {message}")

    headers = None
    if status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, StarletteHTTPException) and exc.headers:
        headers = dict(exc.headers)

    response = envelope_response(status_code, message, success=False, **extras)
    if headers:
        response.headers.update(headers)
    return response


async def route_not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes answer with the envelope instead of {"detail": "Not Found"}."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        exc = StarletteHTTPException(status_code=404, detail=f"Route not found - {request.url.path}")
    return await normalize_exception(request, exc)


def install_exception_handlers(app: FastAPI) -> None:
    """Register the normalizer for every failure type FastAPI can surface."""
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)
    app.add_exception_handler(RequestValidationError, normalize_exception)
    app.add_exception_handler(ValidationError, normalize_exception)
    app.add_exception_handler(JWTError, normalize_exception)
    app.add_exception_handler(ProdManagerException, normalize_exception)
    app.add_exception_handler(Exception, normalize_exception)
