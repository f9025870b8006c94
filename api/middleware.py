import time
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request: client, method, path, status and wall time."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        client = request.client.host if request.client else "unknown"
        logger.info(
            "%s %s %s -> %d (%dms)",
            client,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response
