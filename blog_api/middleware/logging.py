"""
Blog API: Request Logging Middleware
=======================================

What:  One access-log line per HTTP request.
How:   Times the rest of the stack, then logs method, URL (query string
       included, as echoed by the not-found message), status, duration,
       request ID and client address.
When:  Mounted by `create_app()` when ACCESS_LOG is enabled. Runs inside
       RequestIDMiddleware so the request ID is already set.

Requests that matched no route are tagged `(no route)`: the not-found
handler marks them on `request.state`, which is shared with this layer.
Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blog_api.middleware.request_id import request_id_var

logger = logging.getLogger("blog_api.access")

# Probes hit these every few seconds
_QUIET_PATHS = frozenset({"/", "/health"})


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
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        unmatched = getattr(request.state, "route_missing", False)
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] from %s%s",
            request.method,
            target,
            response.status_code,
            duration_ms,
            rid,
            client_ip,
            " (no route)" if unmatched else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "target": target,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "route_missing": unmatched,
            },
        )
        return response
