"""
Meta-tag injection for the frontend HTML shell.

The built index.html carries __META_*__ placeholders. Each navigation gets
them replaced with the site-wide meta settings, overridden by the blog or
project being viewed on detail pages.
"""
import logging
import os
import re
from html import escape
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from apps.shared import config
from apps.blog.models import Blog
from apps.projects.models import Project
from apps.site.models import MetaSettings
from apps.shared.upsert import SINGLETON_ID

logger = logging.getLogger(__name__)

BLOG_PATH = re.compile(r"^/blog/([^/]+)/?$")
PROJECT_PATH = re.compile(r"^/portfolio/([^/]+)/?$")
DEFAULT_OG_IMAGE = "/og-image.jpg"


def index_html_path() -> str:
    return os.path.join(config.FRONTEND_DIST_DIR, "index.html")


def read_index_html() -> Optional[str]:
    path = index_html_path()
    if not os.path.isfile(path):
        return None
    with open(path, encoding="utf-8") as f:
        return f.read()


def _absolute(url: str) -> str:
    return url if url.startswith("http") else f"{config.SITE_URL}{url}"


def _default_image(settings: MetaSettings) -> str:
    return _absolute(settings.og_image or settings.favicon or DEFAULT_OG_IMAGE)


def _detail_override(db: Session, path: str, settings: MetaSettings) -> Optional[dict]:
    """Title, description and image for blog/project detail pages."""
    match = BLOG_PATH.match(path)
    if match:
        blog = (
            db.query(Blog)
            .filter(Blog.slug == match.group(1), Blog.status == "published")
            .first()
        )
        if blog:
            return {
                "title": f"{blog.title} | {settings.site_title}",
                "description": blog.excerpt or settings.site_description,
                "image": _absolute(blog.cover_image) if blog.cover_image else _default_image(settings),
            }
        return None

    match = PROJECT_PATH.match(path)
    if match:
        project = db.query(Project).filter(Project.slug == match.group(1)).first()
        if project:
            return {
                "title": f"{project.title} | {settings.site_title}",
                "description": project.description or settings.site_description,
                "image": _absolute(project.cover_image) if project.cover_image else _default_image(settings),
            }
    return None


def inject_meta(html: str, db: Session, path: str) -> str:
    """
    Replace the placeholders in html for the page at path.
    Returns html unchanged when no meta settings row exists.
    """
    settings = db.get(MetaSettings, SINGLETON_ID)
    if settings is None:
        return html

    title = settings.site_title or ""
    description = settings.site_description or ""
    image = _default_image(settings)

    try:
        override = _detail_override(db, path, settings)
    except SQLAlchemyError as e:
        logger.error(f"Meta lookup failed for {path}: {e}")
        db.rollback()
        override = None

    if override:
        title = override["title"]
        description = override["description"] or ""
        image = override["image"]

    values = {
        "__META_TITLE__": title,
        "__META_DESCRIPTION__": description,
        "__META_KEYWORDS__": settings.site_keywords or "",
        "__META_URL__": f"{config.SITE_URL}{path}",
        "__META_OG_IMAGE__": image,
        "__META_FB_APP_ID__": settings.facebook_app_id or "",
        "__META_FAVICON__": settings.favicon or "",
        "__META_TWITTER_HANDLE__": settings.twitter_handle or "",
    }
    for placeholder, value in values.items():
        html = html.replace(placeholder, escape(value))
    return html


def render_index_html(db: Session, path: str) -> Optional[str]:
    """
    The frontend shell for path with meta tags filled in.

    Returns None when the frontend has not been built. Any failure while
    filling in meta tags is logged and the untouched shell is served.
    """
    html = read_index_html()
    if html is None:
        return None
    try:
        return inject_meta(html, db, path)
    except Exception as e:
        logger.error(f"Meta injection failed for {path}: {e}", exc_info=e)
        return html
