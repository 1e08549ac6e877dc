"""Error handling. Every failure leaves as a {success: false, message} envelope."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..constants import messages

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Handled failure with an HTTP status and a client-facing message."""

    def __init__(self, status_code: int, message: str, headers: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.headers = headers


def error_body(message: str, **extra) -> dict:
    return {"success": False, "message": message, **extra}


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        # loc is ("body", "title") / ("query", "page") / ("path", "recipe_id")
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(ApiError)
    async def api_error_handler(_: Request, exc: ApiError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(messages.VALIDATION_FAILED, errors=_field_errors(exc)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException):
        detail = exc.detail
        if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
            detail = messages.ROUTE_NOT_FOUND
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(_: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        from ..config.settings import settings
        message = messages.SERVER_ERROR
        if settings.debug:
            message = f"{type(exc).__name__}: {str(exc)}"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(message),
        )
