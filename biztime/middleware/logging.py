"""
BizTime Backend — Access Log Middleware
========================================

What:  One access log line per HTTP request, keyed by resource route.
How:   After the downstream call, the matched FastAPI route is read from the
       ASGI scope so the line carries the route template
       (`PUT /invoices/{invoice_id}`) next to the resource key taken from the
       path parameters (`invoice_id=7`, `code=apple`). Requests that matched
       no route fall back to the raw path.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Log levels:
    5xx               → ERROR
    4xx               → WARNING
    GET /health 2xx   → DEBUG (polled by orchestrators)
    everything else   → INFO

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from biztime.middleware.request_id import request_id_var

logger = logging.getLogger("biztime.access")

HEALTH_ROUTE = "/health"


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _resource_key(request: Request) -> str:
    """Path parameters as `name=value`, e.g. `code=apple`."""
    params = request.scope.get("path_params") or {}
    return " ".join(f"{name}={value}" for name, value in params.items())


def _log_level(route: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if route == HEALTH_ROUTE:
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        route = _route_template(request)
        resource = _resource_key(request)
        status = response.status_code
        rid = request_id_var.get("")

        logger.log(
            _log_level(route, status),
            "%s %s %d %.1fms [%s]%s",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            f" {resource}" if resource else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "resource": resource,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
