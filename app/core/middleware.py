"""
Custom Middleware
=================
Request tracking middleware.
"""

import time
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to track request timing.
    """

    def __init__(self, app, slow_request_ms: float = 5000):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.2f}"

        if duration_ms > self.slow_request_ms:
            logger.warning(
                "Slow request detected",
                path=request.url.path,
                method=request.method,
                duration_ms=duration_ms,
            )

        return response
