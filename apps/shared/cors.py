"""Central CORS configuration for the API."""

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.shared import config


# Development origins (Vite dev server and the local API)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5000",
]


def get_allowed_origins() -> list[str]:
    """Allowed CORS origins for the current environment."""
    origins = [config.SITE_URL]

    # FRONTEND_URL when the frontend is hosted separately
    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url:
        clean_url = frontend_url.rstrip("/")
        if clean_url not in origins:
            origins.append(clean_url)

    if config.ENVIRONMENT != "production":
        origins.extend(origin for origin in DEV_ORIGINS if origin not in origins)

    return origins


def setup_cors(app: FastAPI) -> None:
    """Add the CORS middleware; credentials are allowed for the auth cookie."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
