"""
tests/conftest.py

Points the app at a throwaway SQLite database, uploads directory and
frontend build before anything from the app is imported.
"""
import os
import shutil
import tempfile
from typing import Callable, Generator

import pytest

_TMP_ROOT = tempfile.mkdtemp(prefix="portfolio-tests-")
_DIST_DIR = os.path.join(_TMP_ROOT, "dist")
_PUBLIC_DIR = os.path.join(_TMP_ROOT, "public")

INDEX_HTML = """<!doctype html>
<html>
<head>
<title>__META_TITLE__</title>
<meta name="description" content="__META_DESCRIPTION__">
<meta name="keywords" content="__META_KEYWORDS__">
<meta property="og:url" content="__META_URL__">
<meta property="og:image" content="__META_OG_IMAGE__">
<meta property="fb:app_id" content="__META_FB_APP_ID__">
<meta name="twitter:site" content="__META_TWITTER_HANDLE__">
<link rel="icon" href="__META_FAVICON__">
</head>
<body><div id="root"></div></body>
</html>
"""

os.makedirs(_DIST_DIR, exist_ok=True)
os.makedirs(_PUBLIC_DIR, exist_ok=True)
with open(os.path.join(_DIST_DIR, "index.html"), "w", encoding="utf-8") as f:
    f.write(INDEX_HTML)

os.environ.update(
    ENVIRONMENT="test",
    DATABASE_URL=f"sqlite:///{os.path.join(_TMP_ROOT, 'test.sqlite3')}",
    PUBLIC_DIR=_PUBLIC_DIR,
    FRONTEND_DIST_DIR=_DIST_DIR,
    SITE_URL="https://example.test",
    JWT_SECRET="test-jwt-secret",
    SESSION_SECRET="test-session-secret",
)

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from apps.shared import config  # noqa: E402
from apps.shared.database import Base, SessionLocal, engine  # noqa: E402
from apps.auth.create_admin import create_admin_user  # noqa: E402
from apps.auth.models import User  # noqa: E402
from apps.shared.auth import hash_password  # noqa: E402
from apps.seo.main import rss_cache, sitemap_cache  # noqa: E402

ADMIN_EMAIL = "admin@example.test"
ADMIN_PASSWORD = "admin-password"
EDITOR_EMAIL = "editor@example.test"
EDITOR_PASSWORD = "editor-password"


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TMP_ROOT, ignore_errors=True)


@pytest.fixture(autouse=True)
def _fresh_state() -> Generator[None, None, None]:
    """Empty schema, empty uploads directory and cold SEO caches for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    shutil.rmtree(config.UPLOAD_DIR, ignore_errors=True)
    os.makedirs(config.UPLOAD_DIR, exist_ok=True)
    sitemap_cache.invalidate()
    rss_cache.invalidate()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    """Anonymous client with its own cookie jar (session, token)."""
    return TestClient(app)


def _login(email: str, password: str) -> TestClient:
    c = TestClient(app)
    rv = c.post("/api/auth/login", json={"email": email, "password": password})
    assert rv.status_code == 200, rv.text
    return c


@pytest.fixture
def admin_client() -> TestClient:
    create_admin_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD)
    return _login(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def editor_client(db) -> TestClient:
    db.add(User(
        name="Editor",
        email=EDITOR_EMAIL,
        password=hash_password(EDITOR_PASSWORD),
        role="editor",
    ))
    db.commit()
    return _login(EDITOR_EMAIL, EDITOR_PASSWORD)


@pytest.fixture
def upload_file() -> Callable[[str], str]:
    """Factory: create a file in the uploads directory, return its public URL."""

    def _make(name: str, content: bytes = b"fake image bytes") -> str:
        path = os.path.join(config.UPLOAD_DIR, name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)
        return f"{config.UPLOAD_URL_PREFIX}/{name}"

    return _make


def upload_exists(url: str) -> bool:
    relative = url[len(config.UPLOAD_URL_PREFIX) + 1:]
    return os.path.exists(os.path.join(config.UPLOAD_DIR, relative))


def blog_payload(**overrides) -> dict:
    payload = {
        "title": "Hello World",
        "content": "<p>Hello there</p>",
        "plaintext": "Hello there",
        "excerpt": "A first post",
        "status": "published",
    }
    payload.update(overrides)
    return payload


def project_payload(**overrides) -> dict:
    payload = {
        "title": "P1",
        "description": "A small project",
        "content": "<p>Details</p>",
        "plaintext": "Details",
        "status": "completed",
        "category": "web",
        "technologies": ["Python", "FastAPI"],
    }
    payload.update(overrides)
    return payload
