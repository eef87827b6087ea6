"""
MockAPI — Request Logging Middleware
=====================================

What:  One access log line per request: method, path with query string,
       status, duration and request ID.
How:   Measures wall time around call_next and logs at a level chosen by
       status class. Runs inside RequestIDMiddleware so the ID is set.

Log Line:
    GET /api/products?sort=price-low 200 412.3ms [1a2b3c4d] from 127.0.0.1

    The duration includes simulated latency, so it matches what a frontend
    observes.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from mockapi.middleware.request_id import request_id_var

logger = logging.getLogger("mockapi.access")

# Polled by monitors; not worth an access line each time
QUIET_PATHS = {"/api/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each HTTP request with its outcome.

    Levels:
        5xx → ERROR
        4xx → WARNING
        2xx/3xx → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            target,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
