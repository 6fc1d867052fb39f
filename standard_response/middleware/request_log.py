"""Request logging middleware — one line per request with status and timing."""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, query, status code and duration of every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        query = f"?{request.url.query}" if request.url.query else ""
        logger.info(
            "%s %s%s -> %s (%sms)",
            request.method,
            request.url.path,
            query,
            response.status_code,
            duration_ms,
        )
        return response
