"""
Application configuration

All settings come from environment variables (optionally a .env file).
Loaded once at import time; modules read the values from here.
"""
import os
import logging
import secrets
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql+psycopg2://portfolio_user:changeme@db:5432/portfolio_db",
)

# Public files (uploads) and the built frontend shell
PUBLIC_DIR = os.getenv("PUBLIC_DIR", os.path.join(os.getcwd(), "public"))
UPLOAD_DIR = os.path.join(PUBLIC_DIR, "uploads")
UPLOAD_URL_PREFIX = "/uploads"
FRONTEND_DIST_DIR = os.getenv("FRONTEND_DIST_DIR", os.path.join(os.getcwd(), "dist"))
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(5 * 1024 * 1024)))  # 5 MB

# Public site identity (sitemap, RSS, meta tags)
SITE_URL = os.getenv("SITE_URL", "http://localhost:5000").rstrip("/")
SITE_NAME = os.getenv("SITE_NAME", "Portfolio Blog")
SITE_DESCRIPTION = os.getenv(
    "SITE_DESCRIPTION",
    "Blog posts about web development, software and project experiences",
)
SITE_AUTHOR = os.getenv("SITE_AUTHOR", "Site Owner")
SITE_LANGUAGE = os.getenv("SITE_LANGUAGE", "en")

TOKEN_TTL_HOURS = 24
SEO_CACHE_TTL_MS = 3_600_000


def _require_secret(name: str) -> str:
    value = os.getenv(name)
    if value:
        return value
    if ENVIRONMENT == "production":
        raise RuntimeError(
            f"{name} must be set in production. "
            "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
        )
    logger.warning(
        f"{name} not set - using a random per-process secret (development mode). "
        "Sessions and logins will not survive a restart."
    )
    return secrets.token_urlsafe(32)


JWT_SECRET = _require_secret("JWT_SECRET")
SESSION_SECRET = _require_secret("SESSION_SECRET")
