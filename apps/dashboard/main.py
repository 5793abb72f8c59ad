"""
Admin dashboard API

Counts, total views and the latest posts/messages for the admin home page.
"""
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from apps.shared.database import get_db
from apps.shared.auth import require_admin
from apps.blog.models import Blog
from apps.projects.models import Project
from apps.site.models import ContactMessage

RECENT_LIMIT = 5

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _format_date(value):
    return value.date().isoformat() if value else None


@router.get("/stats")
def get_stats(admin=Depends(require_admin), db: Session = Depends(get_db)):
    blog_views = db.query(func.coalesce(func.sum(Blog.views), 0)).scalar()
    project_views = db.query(func.coalesce(func.sum(Project.views), 0)).scalar()
    return {
        "blogs": db.query(func.count(Blog.id)).scalar(),
        "projects": db.query(func.count(Project.id)).scalar(),
        "messages": db.query(func.count(ContactMessage.id)).scalar(),
        "totalViews": int(blog_views) + int(project_views),
    }


@router.get("/recent-posts")
def get_recent_posts(admin=Depends(require_admin), db: Session = Depends(get_db)):
    posts = (
        db.query(Blog)
        .order_by(Blog.created_at.desc(), Blog.id.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    return [
        {
            "id": post.id,
            "title": post.title,
            "slug": post.slug,
            "date": _format_date(post.created_at),
            "views": post.views,
        }
        for post in posts
    ]


@router.get("/recent-messages")
def get_recent_messages(admin=Depends(require_admin), db: Session = Depends(get_db)):
    messages = (
        db.query(ContactMessage)
        .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    return [
        {
            "id": message.id,
            "name": message.name,
            "email": message.email,
            "message": message.message,
            "date": _format_date(message.created_at),
        }
        for message in messages
    ]
