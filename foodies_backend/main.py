"""Foodies FastAPI app: CORS, rate limiting, JWT, /api routes, Swagger."""
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi.staticfiles import StaticFiles

from .config.settings import settings
from .config.database import init_db
from .config.cors import setup_cors
from .config.log import setup_logging
from .middleware.access_log import AccessLogMiddleware
from .middleware.errors import register_exception_handlers
from .middleware.rate_limit import RateLimitMiddleware
from .routes.api import router as api_router

# register SQLAlchemy models for create_all
from . import models  # noqa: F401

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    await init_db()
    yield


def custom_openapi(app: FastAPI):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=settings.app_name,
        version="1.0.0",
        description="Foodies recipe-sharing API: auth, recipes, favorites, follows, lookups.",
        routes=app.routes,
    )
    openapi_schema["servers"] = [{"url": "/", "description": "Current"}]
    openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})["HTTPBearer"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    app.openapi_schema = openapi_schema
    return app.openapi_schema


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        description="Foodies REST API: Auth, Users, Recipes, Lookups",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # added last runs first: access log wraps the rate limiter, CORS wraps both
    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            trust_proxy=settings.rate_limit_trust_proxy,
        )
    app.add_middleware(AccessLogMiddleware)
    setup_cors(app)
    register_exception_handlers(app)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

    app.include_router(api_router)
    app.openapi = lambda: custom_openapi(app)

    @app.get("/health", tags=["health"])
    async def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - STARTED_AT, 3),
        }

    return app


app = create_app()
