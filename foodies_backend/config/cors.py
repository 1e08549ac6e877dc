"""CORS setup. Frontend and API are served from different origins."""
from fastapi.middleware.cors import CORSMiddleware
from .settings import settings


def setup_cors(app):
    """Apply the CORS middleware to the FastAPI app."""
    if settings.cors_allow_all:
        # "*" cannot be combined with credentials
        allow_origins = ["*"]
        allow_credentials = False
    else:
        allow_origins = settings.cors_origin_list.copy()
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["*"],
    )
