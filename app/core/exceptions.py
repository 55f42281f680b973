"""
Global exception handling for the application.
Standardizes error responses into a single ``{"error": {...}}`` envelope.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppError):
    """Malformed or out-of-range input. ``details`` maps field -> message."""
    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ConflictException(AppError):
    """Duplicate unique value or stale write."""
    def __init__(self, message: str = "Conflict", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class InvalidTokenError(UnauthorizedException):
    """Token signature does not verify or the token is malformed."""
    def __init__(self, message: str = "Invalid token", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class TokenExpiredError(InvalidTokenError):
    """Token is well-formed and signed but past its expiry."""
    def __init__(self, message: str = "Token has expired", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


def _error_response(request: Request, status_code: int, code: str, message: str,
                    details: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "path": request.url.path,
            }
        },
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedException):
        headers = {"WWW-Authenticate": "Bearer"}
    return _error_response(request, exc.status_code, exc.__class__.__name__, exc.message, exc.details, headers)


def validation_details(errors) -> Dict[str, Any]:
    """Map pydantic errors to ``{field: message}``; unparseable JSON lands under ``body``."""
    details: Dict[str, Any] = {}
    for error in errors:
        if error.get("type") == "json_invalid":
            field = "body"
        else:
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
            field = ".".join(loc) or "request"
        details.setdefault(field, error.get("msg", "Invalid value"))
    return details


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Re-shape FastAPI's 422 into a per-field 400 ValidationException."""
    return await app_error_handler(request, ValidationException(details=validation_details(exc.errors())))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(
        request,
        exc.status_code,
        "HTTPException",
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)

    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error", path=request.url.path, error=str(exc.orig))
        return await app_error_handler(request, ConflictException("Resource conflicts with an existing record"))

    if isinstance(exc, StaleDataError):
        logger.warning("Stale write rejected", path=request.url.path)
        return await app_error_handler(request, ConflictException("Resource was modified by another request"))

    logger.exception("Unexpected error occurred", path=request.url.path)

    details = {}
    if not get_settings().is_production:
        details["exception"] = f"{exc.__class__.__name__}: {exc}"

    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "An unexpected error occurred. Please try again later.",
        details,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, global_exception_handler)
    app.add_exception_handler(StaleDataError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
