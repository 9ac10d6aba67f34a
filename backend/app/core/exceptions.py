"""
Application exception taxonomy and the global exception handlers.
Every error leaves the API as {"error": ..., "message": ..., "path": ...}.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any, Optional


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(
        self,
        error: str,
        status_code: int = 500,
        message: Optional[str] = None,
        details: Any = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.error)


class ValidationException(AppException):
    """Missing or invalid input (400)."""
    def __init__(self, error: str, message: Optional[str] = None, details: Any = None):
        super().__init__(error, status.HTTP_400_BAD_REQUEST, message, details)


class NotFoundException(AppException):
    """Referenced record does not exist (404)."""
    def __init__(self, error: str, message: Optional[str] = None, details: Any = None):
        super().__init__(error, status.HTTP_404_NOT_FOUND, message, details)


class ConflictException(AppException):
    """Uniqueness or referential-integrity conflict (409)."""
    def __init__(self, error: str, message: Optional[str] = None, details: Any = None):
        super().__init__(error, status.HTTP_409_CONFLICT, message, details)


def _error_body(request: Request, error: str, message: Optional[str] = None, details: Any = None) -> dict:
    body = {"error": error, "path": request.url.path}
    if message:
        body["message"] = message
    if details is not None:
        body["details"] = details
    return body


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.warning(
        f"Application exception: {exc.error}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.error, exc.message, exc.details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {}
        for key, value in error.items():
            if key == "ctx" and isinstance(value, dict):
                # ctx may carry the raised ValueError itself
                serialized_error[key] = {
                    ctx_key: str(ctx_value) if isinstance(ctx_value, Exception) else ctx_value
                    for ctx_key, ctx_value in value.items()
                }
            elif isinstance(value, Exception):
                serialized_error[key] = str(value)
            else:
                serialized_error[key] = value
        serialized.append(serialized_error)
    return serialized


def _summarize_validation_errors(errors: list) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400s."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            request,
            "Validation error",
            _summarize_validation_errors(serialized_errors),
            serialized_errors,
        ),
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database constraint violations that slipped past service checks."""
    logger.warning(
        "Integrity error",
        extra={
            "path": request.url.path,
            "db_error": str(exc.orig),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body(
            request,
            "Conflict with existing data",
            "The request violates a uniqueness or reference constraint.",
        ),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "Internal server error"),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
