"""
Sitemap and RSS document builders.

Both read the current store state and return a complete XML string;
caching is the caller's concern (see apps.seo.cache).
"""
import mimetypes
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from html import escape
from typing import Optional

from sqlalchemy.orm import Session

from apps.shared import config
from apps.shared.uploads import url_to_path
from apps.blog.models import Blog
from apps.projects.models import Project


@dataclass
class SitemapLink:
    url: str
    changefreq: str
    priority: float
    lastmod: Optional[str] = None


STATIC_LINKS = [
    SitemapLink("/", "daily", 1.0),
    SitemapLink("/about", "monthly", 0.7),
    SitemapLink("/contact", "monthly", 0.7),
    SitemapLink("/blog", "weekly", 0.8),
    SitemapLink("/portfolio", "weekly", 0.8),
]


def _as_utc(value: datetime) -> datetime:
    # Database timestamps are stored naive in UTC
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def _lastmod(entity) -> Optional[str]:
    stamp = entity.updated_at or entity.created_at
    return stamp.date().isoformat() if stamp else None


def sitemap_links(db: Session) -> list[SitemapLink]:
    """Static pages, published blogs and all projects."""
    links = list(STATIC_LINKS)

    blogs = (
        db.query(Blog)
        .filter(Blog.status == "published")
        .order_by(Blog.created_at.desc(), Blog.id.desc())
        .all()
    )
    for blog in blogs:
        links.append(SitemapLink(f"/blog/{blog.slug}", "monthly", 0.6, _lastmod(blog)))

    # Projects have no draft state; completed and in-progress ones are public
    projects = db.query(Project).order_by(Project.created_at.desc(), Project.id.desc()).all()
    for project in projects:
        links.append(SitemapLink(f"/portfolio/{project.slug}", "monthly", 0.6, _lastmod(project)))

    return links


def build_sitemap(db: Session) -> str:
    entries = []
    for link in sitemap_links(db):
        lastmod = f"<lastmod>{link.lastmod}</lastmod>" if link.lastmod else ""
        entries.append(
            f"<url><loc>{escape(config.SITE_URL + link.url)}</loc>"
            f"{lastmod}"
            f"<changefreq>{link.changefreq}</changefreq>"
            f"<priority>{link.priority:.1f}</priority></url>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(entries)
        + "\n</urlset>"
    )


def _enclosure(image_url: Optional[str]) -> str:
    if not image_url:
        return ""
    mime_type = mimetypes.guess_type(image_url)[0] or "image/jpeg"
    path = url_to_path(image_url)
    length = os.path.getsize(path) if path and os.path.isfile(path) else 0
    absolute = image_url if image_url.startswith("http") else config.SITE_URL + image_url
    return f'<enclosure url="{escape(absolute)}" length="{length}" type="{mime_type}"/>'


def build_rss(db: Session, now: Optional[datetime] = None) -> str:
    """RSS 2.0 feed of published blogs, newest first."""
    now = now or datetime.now(timezone.utc)
    feed_url = f"{config.SITE_URL}/rss"

    blogs = (
        db.query(Blog)
        .filter(Blog.status == "published")
        .order_by(Blog.created_at.desc(), Blog.id.desc())
        .all()
    )

    items = []
    for blog in blogs:
        link = f"{config.SITE_URL}/blog/{blog.slug}"
        pub_date = format_datetime(_as_utc(blog.created_at)) if blog.created_at else ""
        items.append(
            f"""
    <item>
      <title>{escape(blog.title)}</title>
      <description>{escape(blog.excerpt or "")}</description>
      <link>{escape(link)}</link>
      <guid isPermaLink="false">blog-{blog.id}</guid>
      <dc:creator>{escape(config.SITE_AUTHOR)}</dc:creator>
      <pubDate>{pub_date}</pubDate>
      {_enclosure(blog.cover_image)}
    </item>"""
        )

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:atom="http://www.w3.org/2005/Atom"
     xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>{escape(config.SITE_NAME)}</title>
    <description>{escape(config.SITE_DESCRIPTION)}</description>
    <link>{escape(config.SITE_URL)}</link>
    <image>
      <url>{escape(config.SITE_URL)}/logo.png</url>
      <title>{escape(config.SITE_NAME)}</title>
      <link>{escape(config.SITE_URL)}</link>
    </image>
    <language>{escape(config.SITE_LANGUAGE)}</language>
    <pubDate>{format_datetime(now)}</pubDate>
    <lastBuildDate>{format_datetime(now)}</lastBuildDate>
    <ttl>60</ttl>
    <atom:link href="{escape(feed_url)}" rel="self" type="application/rss+xml"/>
{"".join(items)}
  </channel>
</rss>"""


def build_robots_txt() -> str:
    return (
        "# Portfolio Website Robots.txt\n"
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /admin/\n"
        "Disallow: /login\n"
        "Disallow: /register\n"
        "\n"
        "# Sitemap\n"
        f"Sitemap: {config.SITE_URL}/sitemap.xml\n"
        "\n"
        "# RSS Feed\n"
        f"Sitemap: {config.SITE_URL}/rss\n"
    )
