"""Per-IP fixed-window rate limiting."""
import logging
import time

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..constants import messages
from .errors import error_body

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Allow `max_requests` per client IP in each `window_seconds` window.

    Counters live in process memory, so limits apply per worker. The client
    is the socket peer unless `trust_proxy` is set, in which case the first
    X-Forwarded-For entry is used.
    """

    def __init__(self, app, *, max_requests: int, window_seconds: int, trust_proxy: bool = False):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.trust_proxy = trust_proxy
        self.exempt_paths = {"/health"}
        self._windows: dict[str, tuple[float, int]] = {}
        self._next_sweep = 0.0

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        allowed, remaining, reset_at = self._hit(client_ip, time.monotonic())
        if not allowed:
            logger.warning("Rate limit exceeded for %s on %s", client_ip, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=error_body(messages.TOO_MANY_REQUESTS),
                headers={"Retry-After": str(max(1, int(reset_at - time.monotonic())))},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response

    def _sweep(self, now: float) -> None:
        """Drop windows that have expired; runs at most once per window."""
        if now < self._next_sweep:
            return
        expired = [key for key, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]
        self._next_sweep = now + self.window_seconds

    def _hit(self, key: str, now: float) -> tuple[bool, int, float]:
        self._sweep(now)
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[key] = (started, count)
        reset_at = started + self.window_seconds
        return count <= self.max_requests, max(0, self.max_requests - count), reset_at

    def _get_client_ip(self, request: Request) -> str:
        if self.trust_proxy:
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"
