"""
Portfolio site server

One FastAPI application for the JSON API, uploaded files, SEO documents
and the frontend shell.

Run with:
    uvicorn app.main:app --host 0.0.0.0 --port 5000
"""
import logging
import os
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from apps.shared import config
from apps.shared.cors import setup_cors
from apps.shared.database import Base, engine, check_db_connection
from apps.shared.errors import unhandled_exception_handler, validation_exception_handler
from apps.shared.security_headers import setup_security_headers
from apps.auth.main import router as auth_router
from apps.blog.main import router as blog_router
from apps.projects.main import router as projects_router
from apps.site.main import router as site_router
from apps.upload.main import router as upload_router
from apps.dashboard.main import router as dashboard_router
from apps.seo.main import router as seo_router, spa_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables (every model module is imported above)
Base.metadata.create_all(bind=engine)

os.makedirs(config.UPLOAD_DIR, exist_ok=True)

app = FastAPI(
    title="Portfolio Site",
    version="1.0.0",
    description="Blog, portfolio projects and site content with an admin API",
)

setup_cors(app)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    same_site="lax",
    https_only=config.ENVIRONMENT == "production",
)
setup_security_headers(app)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.mount(config.UPLOAD_URL_PREFIX, StaticFiles(directory=config.UPLOAD_DIR), name="uploads")


@app.get("/api/health")
def health():
    """Health check endpoint"""
    db_connected = check_db_connection()
    return {
        "status": "ok" if db_connected else "degraded",
        "database": "connected" if db_connected else "disconnected",
    }


app.include_router(auth_router)
app.include_router(blog_router)
app.include_router(projects_router)
app.include_router(site_router)
app.include_router(upload_router)
app.include_router(dashboard_router)
app.include_router(seo_router)
# Must stay last: matches every remaining path
app.include_router(spa_router)

logger.info(f"Portfolio site started ({config.ENVIRONMENT})")
