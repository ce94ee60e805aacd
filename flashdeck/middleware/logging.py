"""
Flashdeck Backend — Access Logging Middleware
===============================================

One line per request on the `flashdeck.access` logger, e.g.:

    2026-01-15T12:00:00 [INFO] flashdeck.access: POST /cards -> 201 (4.2ms) rid=1f0c2a9b

Level follows the status class (5xx ERROR, 4xx WARNING, else INFO). A request
that raises past the exception handlers is logged as 500 before the error
propagates. Bodies are never logged. /health is skipped.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from flashdeck.middleware.request_id import request_id_var

logger = logging.getLogger("flashdeck.access")

SKIP_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.log(
                level_for_status(status),
                "%s %s -> %d (%.1fms) rid=%s",
                request.method,
                request.url.path,
                status,
                elapsed_ms,
                request_id_var.get(""),
                extra={
                    "client_ip": request.client.host if request.client else None,
                    "duration_ms": round(elapsed_ms, 2),
                },
            )
