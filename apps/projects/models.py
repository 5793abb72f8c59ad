"""
Projects database models.

Stores portfolio projects (metadata, links, technologies) and their
cover/gallery image rows.
"""
from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, JSON, func
from sqlalchemy.orm import relationship

from apps.shared.database import Base
from apps.shared.content import split_images


class Project(Base):
    """
    Project model for portfolio projects.

    Stores all project data including:
    - Basic info (title, description, rich content and its plain-text mirror)
    - Metadata (category, client, duration, year, technologies)
    - Links (live site, GitHub)
    - Status (completed | in_progress) and view counter
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    plaintext = Column(Text, nullable=False)
    category = Column(String(100))
    client = Column(String(255))
    duration = Column(String(100))
    year = Column(Integer)
    live_url = Column(String(500))
    github_url = Column(String(500))
    technologies = Column(JSON, default=list)  # ["React", "Python", "PostgreSQL"]
    status = Column(String(20), nullable=False, default="in_progress")
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    images = relationship(
        "ProjectImage",
        order_by="ProjectImage.id",
        lazy="selectin",
        viewonly=True,
    )

    @property
    def cover_image(self):
        return split_images(self.images)[0]

    @property
    def gallery_images(self):
        return split_images(self.images)[1]


class ProjectImage(Base):
    __tablename__ = "project_images"

    id = Column(Integer, primary_key=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    image_url = Column(String(500), nullable=False)
    type = Column(String(20), nullable=False)  # cover | gallery
    created_at = Column(DateTime, server_default=func.now())
