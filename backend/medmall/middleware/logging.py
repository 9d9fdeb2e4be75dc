"""
MedMall Back Office - Access Log Middleware
============================================

What:  One log line per request on the `medmall.access` logger.
How:   Measures wall time around the downstream call and logs method, path,
       status, duration, request id, caller id and client address. The level
       follows the status class: 5xx ERROR, 4xx WARNING, otherwise INFO.

Request and response bodies are never logged; they carry addresses, phone
numbers and payment data. The bearer token is never logged either, only the
decoded principal's id once authorization has run.

Example:
    GET /api/refunds 200 12.4ms [a1b2c3d4] user=5f0c... from 10.0.0.7
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from medmall.middleware.request_id import request_id_var

logger = logging.getLogger("medmall.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured access log; /health is skipped."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        principal = getattr(request.state, "principal", None)
        user_id = principal.user_id if principal is not None else "-"

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            user_id,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "user_id": user_id,
                "client_ip": client_ip,
            },
        )
        return response
