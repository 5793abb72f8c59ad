"""Security headers for every response."""

from fastapi import FastAPI, Request
from fastapi.responses import Response

from apps.shared import config


DEFAULT_CSP = (
    "default-src 'self'; "
    "img-src 'self' data: https:; "
    "font-src 'self' data: https:; "
    "script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; "
    "connect-src 'self'"
)

HSTS = "max-age=31536000; includeSubDomains"
API_CACHE_CONTROL = "no-cache, no-store, must-revalidate"


def setup_security_headers(app: FastAPI) -> None:
    """
    Add nosniff, X-Frame-Options and CSP to all responses, HSTS in
    production, and disable caching of /api responses.
    """

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Content-Security-Policy", DEFAULT_CSP)
        if config.ENVIRONMENT == "production":
            response.headers.setdefault("Strict-Transport-Security", HSTS)
        if request.url.path.startswith("/api"):
            response.headers.setdefault("Cache-Control", API_CACHE_CONTROL)
        return response
