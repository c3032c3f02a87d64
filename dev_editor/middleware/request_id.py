"""
Dev Editor — Request ID Middleware
===================================

What:  Assigns a short ID to each request and echoes it in `X-Request-ID`.
How:   A client-sent `X-Request-ID` is reused when it is a short token
       (letters, digits, `-`, `_`, `.`); anything else is replaced with the
       first 8 hex characters of a UUID4. The ID lives in a ContextVar so
       loggers and exception handlers can read it without the request.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

_CLIENT_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request and response with a correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        sent = request.headers.get(HEADER, "")
        rid = sent if _CLIENT_ID.match(sent) else new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[HEADER] = rid
        return response
