"""
Dev Editor — Request Logging Middleware
========================================

What:  One access-log line per request: method, path, status, duration,
       request payload size, and request ID.
How:   Level follows the status class (5xx → ERROR, 4xx → WARNING, else INFO).
       /health and CORS preflight requests are skipped. A request whose
       handler raises is logged as 500 before the error propagates to the
       catch-all handler.

Request bodies are never logged: they carry whole Markdown files and
base64-encoded images. Only their declared size is.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from dev_editor.middleware.request_id import request_id_var

logger = logging.getLogger("dev_editor.access")

_SKIPPED_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _content_length(request: Request) -> int:
    value = request.headers.get("content-length", "")
    return int(value) if value.isdigit() else 0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request's outcome and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIPPED_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        rid = request_id_var.get("")
        started = time.perf_counter()
        fields = {
            "request_id": rid,
            "method": request.method,
            "path": request.url.path,
            "bytes_in": _content_length(request),
        }

        try:
            response = await call_next(request)
        except Exception:
            fields.update(status=500, duration_ms=round((time.perf_counter() - started) * 1000, 2))
            logger.error(
                "%(method)s %(path)s failed after %(duration_ms).1fms [%(request_id)s]",
                fields,
                extra=fields,
            )
            raise

        fields.update(
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        logger.log(
            _level_for(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms in=%(bytes_in)dB [%(request_id)s]",
            fields,
            extra=fields,
        )
        return response
