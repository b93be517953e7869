"""Middleware that logs one line per request: method, path, status, duration."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("blogapi.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request after the response is produced, failed ones included."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The 500 body is rendered by the outer error middleware.
            self._log(request, 500, started)
            raise
        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, started: float) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            status_code,
            duration_ms,
        )
