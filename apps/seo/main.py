"""
SEO API

Sitemap and RSS (cached for an hour), robots.txt, and the SPA fallback
that serves the frontend shell with meta tags filled in.
"""
import logging
import os
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from apps.shared import config
from apps.shared.database import get_db
from apps.shared.errors import log_and_sanitize_error
from apps.seo.cache import DocumentCache
from apps.seo.feeds import build_robots_txt, build_rss, build_sitemap
from apps.seo.meta import render_index_html

logger = logging.getLogger(__name__)

sitemap_cache = DocumentCache("sitemap", config.SEO_CACHE_TTL_MS)
rss_cache = DocumentCache("rss", config.SEO_CACHE_TTL_MS)

XML_MEDIA_TYPE = "application/xml"

router = APIRouter(tags=["seo"])

# Catch-all for frontend routes; included after every other router
spa_router = APIRouter(tags=["spa"])


@router.get("/sitemap.xml")
def get_sitemap(db: Session = Depends(get_db)):
    try:
        document = sitemap_cache.get(lambda: build_sitemap(db))
    except SQLAlchemyError as e:
        message, _ = log_and_sanitize_error(e, "Sitemap generation")
        return PlainTextResponse(message, status_code=500)
    return Response(content=document, media_type=XML_MEDIA_TYPE)


@router.get("/rss")
def get_rss(db: Session = Depends(get_db)):
    try:
        document = rss_cache.get(lambda: build_rss(db))
    except SQLAlchemyError as e:
        message, _ = log_and_sanitize_error(e, "RSS generation")
        return PlainTextResponse(message, status_code=500)
    return Response(content=document, media_type=XML_MEDIA_TYPE)


@router.get("/robots.txt", response_class=PlainTextResponse)
def get_robots_txt():
    return build_robots_txt()


def _static_file(relative_path: str):
    """Path of a file in the frontend build or the public directory, if any."""
    for root in (config.FRONTEND_DIST_DIR, config.PUBLIC_DIR):
        base = os.path.realpath(root)
        candidate = os.path.realpath(os.path.join(base, relative_path))
        if os.path.commonpath([base, candidate]) != base:
            continue
        if os.path.isfile(candidate):
            return candidate
    return None


@spa_router.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str, db: Session = Depends(get_db)):
    """
    Frontend routes: unknown /api paths are 404 JSON, paths with a file
    extension are static files, everything else gets the HTML shell.
    """
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse(status_code=404, content={"detail": "Not Found"})

    if "." in os.path.basename(full_path):
        path = _static_file(full_path)
        if path is None:
            return JSONResponse(status_code=404, content={"detail": "Not Found"})
        return FileResponse(path)

    html = render_index_html(db, "/" + full_path)
    if html is None:
        logger.warning("Frontend build not found; cannot serve HTML shell")
        return JSONResponse(status_code=404, content={"detail": "Not Found"})
    return HTMLResponse(html)
