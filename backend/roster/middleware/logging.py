"""
Roster Backend — Request Logging Middleware
============================================

What:  One access log line per HTTP request.
How:   Measures time around call_next and logs on the `roster.access` logger.
When:  Runs inside RequestIDMiddleware, so request.state.request_id is set.

The path is logged as the matched route template (`/api/users/{user_id}`),
so lines for different ids group together; unmatched requests fall back to
the raw path. Request bodies are never logged; they contain email addresses.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("roster.access")

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, route, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = getattr(request.state, "request_id", "")
        route = route_template(request)
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s]",
            request.method,
            route,
            response.status_code,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "path_params": dict(request.path_params),
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
