"""One log line per HTTP request.

Query values that may carry secrets (verification tokens, the page url the
extension is looking up) are masked before they reach the log.
"""

import logging
import time

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from chromepass.core.settings import get_settings

logger = logging.getLogger("chromepass.request")

MASKED_QUERY_PARAMS = frozenset({"token", "password", "url"})


def masked_query(request: Request) -> str:
    return "&".join(
        f"{key}={'***' if key in MASKED_QUERY_PARAMS else value}"
        for key, value in request.query_params.multi_items()
    )


def _level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration, plus the acting user's id once
    authentication has put it on ``request.state``."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            query = masked_query(request)
            logger.log(
                _level(status_code),
                "%s %s -> %s in %sms",
                request.method,
                request.url.path,
                status_code,
                duration_ms,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query": query or None,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else None,
                    "user_id": getattr(request.state, "user_id", None),
                },
            )


def add_request_logging_middleware(app: FastAPI) -> None:
    """Attach the middleware unless ``LOG_REQUESTS`` is off."""
    if get_settings().log_requests:
        app.add_middleware(RequestLoggingMiddleware)
