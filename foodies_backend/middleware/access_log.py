"""One access-log line per request."""
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("foodies_backend.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # the 500 envelope is rendered further out; log it here before it propagates
            self._log(request, 500, start_time)
            raise
        self._log(request, response.status_code, start_time)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %s %d %.1fms",
            client,
            request.method,
            request.url.path,
            status_code,
            duration_ms,
        )
