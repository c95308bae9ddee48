"""
BizTime Backend — Request ID Middleware
========================================

What:  Assigns a correlation ID to each request and returns it in the
       X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused when it is a short token of
       letters, digits, '.', '_' or '-'; anything else (including a missing
       header) is replaced by 12 hex characters of a UUID4. The ID lives in
       a ContextVar for the duration of the request.
Who:   Read by the access log middleware and the exception handlers in main.py.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# IDs end up in log lines and error bodies
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value) -> str:
    """Return the client's ID if it is well-formed, otherwise a fresh one."""
    if header_value and _CLIENT_ID_PATTERN.match(header_value):
        return header_value
    return uuid.uuid4().hex[:12]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
