"""
Projects API

CRUD endpoints for portfolio projects with cover/gallery images and
per-session view counting.
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
from apps.projects.models import Project, ProjectImage
from apps.projects.schemas import (
    ProjectPayload,
    ProjectResponse,
    ProjectCreatedResponse,
    SlugMessageResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

# Unlike blogs, a project's slug follows its title on every update
project_writer = ContentWriter(
    Project,
    ProjectImage,
    owner_field="project_id",
    label="Project",
    rewrite_slug_on_update=True,
)

router = APIRouter(prefix="/api/projects", tags=["projects"])


# ──────────────────────────────────────────────────────────────────────────────
# Public endpoints (no auth required)
# ──────────────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[ProjectResponse])
def list_projects(
    q: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    List all projects, newest first.
    Optional `q` searches title/description/plain text, `category` filters exactly.
    """
    query = db.query(Project)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(
            Project.title.ilike(pattern),
            Project.description.ilike(pattern),
            Project.plaintext.ilike(pattern),
        ))
    if category:
        query = query.filter(Project.category == category)
    return query.order_by(Project.created_at.desc(), Project.id.desc()).all()


@router.get("/{slug}", response_model=ProjectResponse)
def get_project(slug: str, db: Session = Depends(get_db)):
    """Get a single project by slug."""
    project = db.query(Project).filter(Project.slug == slug).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post("/{slug}/view", response_model=MessageResponse)
def increment_project_view(slug: str, request: Request, db: Session = Depends(get_db)):
    """Count one view per browser session."""
    result = record_view(db, ViewedEntities(request.session), "project", Project, slug)
    if result is ViewResult.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Project not found")
    if result is ViewResult.ALREADY_VIEWED:
        return {"message": "Already viewed"}
    return {"message": "View count incremented"}


# ──────────────────────────────────────────────────────────────────────────────
# Admin endpoints (admin role required)
# ──────────────────────────────────────────────────────────────────────────────

@router.post("", response_model=ProjectCreatedResponse, status_code=201)
def create_project(
    payload: ProjectPayload,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a new project; the slug is derived from the title."""
    try:
        project = project_writer.create(
            db, payload.entity_fields(), payload.cover_image, payload.gallery_images
        )
    except DuplicateTitleError:
        raise HTTPException(status_code=409, detail="A project with this title already exists")
    except InvalidTitleError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"id": project.id, "slug": project.slug, "message": "Project created"}


@router.put("/{slug}", response_model=SlugMessageResponse)
def update_project(
    slug: str,
    payload: ProjectPayload,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Replace a project's fields and images. Returns the (possibly new) slug."""
    try:
        new_slug = project_writer.update(
            db, slug, payload.entity_fields(), payload.cover_image, payload.gallery_images
        )
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except DuplicateTitleError:
        raise HTTPException(status_code=409, detail="A project with this title already exists")
    except InvalidTitleError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"slug": new_slug, "message": "Project updated"}


@router.delete("/{slug}", response_model=MessageResponse)
def delete_project(
    slug: str,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Delete a project, its image rows and their files."""
    try:
        project_writer.delete(db, slug)
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")

    return {"message": "Project deleted"}
