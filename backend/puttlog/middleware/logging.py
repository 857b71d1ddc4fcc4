"""
PuttLog Backend - Request Logging Middleware
=============================================

What:  One access-log line per HTTP request: method, path, status, duration.
How:   Times the downstream call and logs on completion, with the request ID
       from RequestIDMiddleware for correlation.
Who:   Applied to every request except /health.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: request bodies, the identity header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from puttlog.middleware.request_id import request_id_var

logger = logging.getLogger("puttlog.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request's outcome.

    Log level follows the status code:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
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
            path,
            status,
            duration_ms,
            rid,
            client_ip,
        )

        return response
