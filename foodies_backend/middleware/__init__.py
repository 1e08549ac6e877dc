from .jwt import get_current_user, CurrentUser
from .errors import ApiError, register_exception_handlers
from .rate_limit import RateLimitMiddleware
from .access_log import AccessLogMiddleware

__all__ = [
    "get_current_user",
    "CurrentUser",
    "ApiError",
    "register_exception_handlers",
    "RateLimitMiddleware",
    "AccessLogMiddleware",
]
