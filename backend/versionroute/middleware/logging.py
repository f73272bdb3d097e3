"""
versionroute — Request Logging Middleware
===========================================

What:  Structured logging for every HTTP request and response.
How:   Logs method, path, status, duration, request ID and the raw version
       header once the response is ready.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware (uses request ID for correlation).

Log line:
    GET /api/hello 200 1.3ms [a1b2c3d4] api-version=3.0.0 from 127.0.0.1

Only headers relevant to routing are logged; request bodies never are.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from versionroute.config import settings
from versionroute.middleware.request_id import request_id_var

logger = logging.getLogger("versionroute.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Level by status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
    Health checks are not logged.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")
        requested_version = request.headers.get(settings.version_header)

        # Health checks run every few seconds; keep them out of the log
        if path == "/health":
            return await call_next(request)

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
            "%s %s %d %.1fms [%s] %s=%s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            settings.version_header,
            requested_version,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "requested_version": requested_version,
                "client_ip": client_ip,
            },
        )

        return response
