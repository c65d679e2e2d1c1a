"""Turn every error into the ``{"type", "message", ...}`` response body.

Client errors are logged at INFO; server errors at ERROR with traceback.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from chromepass.core.exceptions import AppException
from chromepass.core.settings import get_settings

logger = logging.getLogger("chromepass.errors")


def error_response(
    status_code: int,
    error_type: str,
    message: str,
    extra: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"type": error_type, "message": message, **(extra or {})},
        headers=headers,
    )


def _context(request: Request, status_code: int, error_type: str) -> dict[str, Any]:
    return {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "error_type": error_type,
        "user_id": getattr(request.state, "user_id", None),
    }


def handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s: %s",
        exc.error_type,
        exc.message,
        extra=_context(request, exc.status_code, exc.error_type),
    )
    headers = None
    if "retry_after" in exc.extra:
        headers = {"Retry-After": str(exc.extra["retry_after"])}
    return error_response(
        exc.status_code, exc.error_type, exc.message, exc.extra, headers
    )


def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """A unique pair (membership, grant) written twice by concurrent requests."""
    logger.info(
        "Integrity error: %s", exc.orig, extra=_context(request, 400, "conflict")
    )
    return error_response(400, "conflict", "Resource already exists")


def handle_http_exception(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, "http_error", str(exc.detail))


def handle_validation_error(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Join pydantic errors into one message, e.g. ``email: value is not a
    valid email address``."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return error_response(400, "validation_error", "; ".join(messages))


def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled %s",
        type(exc).__name__,
        extra=_context(request, 500, "internal_error"),
        exc_info=exc,
    )
    extra = {"error": str(exc)} if get_settings().is_development else None
    return error_response(500, "internal_error", "An unexpected error occurred", extra)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, handle_app_exception)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
