"""
Blog API

Public reading of published posts, admin CRUD with cover/gallery images,
and per-session view counting.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import or_
from sqlalchemy.orm import Session

from apps.shared.database import get_db
from apps.shared.auth import require_admin
from apps.shared.content import ContentWriter
from apps.shared.errors import ContentNotFoundError, DuplicateTitleError, InvalidTitleError
from apps.shared.views import ViewedEntities, ViewResult, record_view
from apps.blog.models import Blog, BlogImage
from apps.blog.schemas import (
    BlogPayload,
    BlogResponse,
    BlogCreatedResponse,
    SlugMessageResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

# Blog slugs are permalinks: never rewritten when the title changes
blog_writer = ContentWriter(
    Blog,
    BlogImage,
    owner_field="blog_id",
    label="Blog",
    rewrite_slug_on_update=False,
)

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


def _search(query, q: Optional[str]):
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(Blog.title.ilike(pattern), Blog.plaintext.ilike(pattern)))
    return query


# ──────────────────────────────────────────────────────────────────────────────
# Public endpoints (no auth required)
# ──────────────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[BlogResponse])
def list_published_blogs(q: Optional[str] = None, db: Session = Depends(get_db)):
    """
    List published blogs, newest first.
    Optional `q` filters on title and plain-text content.
    """
    query = db.query(Blog).filter(Blog.status == "published")
    return _search(query, q).order_by(Blog.created_at.desc(), Blog.id.desc()).all()


@router.get("/{slug}", response_model=BlogResponse)
def get_blog(slug: str, db: Session = Depends(get_db)):
    """Get a single published blog by slug."""
    blog = (
        db.query(Blog)
        .filter(Blog.slug == slug, Blog.status == "published")
        .first()
    )
    if not blog:
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog


@router.post("/{slug}/view", response_model=MessageResponse)
def increment_blog_view(slug: str, request: Request, db: Session = Depends(get_db)):
    """Count one view per browser session."""
    result = record_view(db, ViewedEntities(request.session), "blog", Blog, slug)
    if result is ViewResult.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Blog not found")
    if result is ViewResult.ALREADY_VIEWED:
        return {"message": "Already viewed"}
    return {"message": "View count incremented"}


# ──────────────────────────────────────────────────────────────────────────────
# Admin endpoints (admin role required)
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/admin/all", response_model=list[BlogResponse])
def list_all_blogs(
    q: Optional[str] = None,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """List all blogs including drafts (admin only)."""
    return _search(db.query(Blog), q).order_by(Blog.created_at.desc(), Blog.id.desc()).all()


@router.get("/admin/{slug}", response_model=BlogResponse)
def get_blog_admin(
    slug: str,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Get any blog by slug (admin only, includes drafts)."""
    blog = db.query(Blog).filter(Blog.slug == slug).first()
    if not blog:
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog


@router.post("", response_model=BlogCreatedResponse, status_code=201)
def create_blog(
    payload: BlogPayload,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a blog; the slug is derived from the title."""
    try:
        blog = blog_writer.create(
            db, payload.entity_fields(), payload.cover_image, payload.gallery_images
        )
    except DuplicateTitleError:
        raise HTTPException(status_code=409, detail="A blog with this title already exists")
    except InvalidTitleError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"id": blog.id, "slug": blog.slug, "message": "Blog created"}


@router.put("/{slug}", response_model=SlugMessageResponse)
def update_blog(
    slug: str,
    payload: BlogPayload,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Replace a blog's fields and images. The slug stays the same."""
    try:
        new_slug = blog_writer.update(
            db, slug, payload.entity_fields(), payload.cover_image, payload.gallery_images
        )
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Blog not found")

    return {"slug": new_slug, "message": "Blog updated"}


@router.delete("/{slug}", response_model=MessageResponse)
def delete_blog(
    slug: str,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Delete a blog, its image rows and their files."""
    try:
        blog_writer.delete(db, slug)
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Blog not found")

    return {"message": "Blog deleted"}
