"""
Pydantic schemas for Projects API.

Defines request/response models with validation.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

ProjectStatus = Literal["completed", "in_progress"]


class ProjectPayload(BaseModel):
    """Request body for create and update (full replacement)."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    plaintext: str = Field(..., min_length=1)
    status: ProjectStatus
    category: Optional[str] = Field(None, max_length=100)
    client: Optional[str] = Field(None, max_length=255)
    duration: Optional[str] = Field(None, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    live_url: Optional[str] = Field(None, max_length=500)
    github_url: Optional[str] = Field(None, max_length=500)
    technologies: list[str] = Field(default_factory=list)
    cover_image: Optional[str] = Field(None, alias="coverImage", max_length=500)
    gallery_images: list[str] = Field(default_factory=list, alias="galleryImages")

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        """Accept "React, FastAPI" as well as ["React", "FastAPI"]."""
        if value is None:
            return []
        if isinstance(value, str):
            return [tech.strip() for tech in value.split(",") if tech.strip()]
        return value

    @field_validator("year", mode="before")
    @classmethod
    def empty_year_is_none(cls, value):
        return None if value == "" else value

    @field_validator("cover_image")
    @classmethod
    def empty_cover_is_none(cls, value):
        return value or None

    @field_validator("gallery_images")
    @classmethod
    def drop_empty_gallery_urls(cls, value):
        return [url for url in value if url]

    def entity_fields(self) -> dict:
        return self.model_dump(exclude={"cover_image", "gallery_images"})


class ProjectResponse(BaseModel):
    """Schema for project responses."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    description: str
    content: str
    plaintext: str
    category: Optional[str] = None
    client: Optional[str] = None
    duration: Optional[str] = None
    year: Optional[int] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    technologies: list[str] = Field(default_factory=list)
    status: str
    views: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    cover_image: Optional[str] = Field(None, serialization_alias="coverImage")
    gallery_images: list[str] = Field(default_factory=list, serialization_alias="galleryImages")

    @field_validator("technologies", mode="before")
    @classmethod
    def null_technologies(cls, value):
        return value or []


class ProjectCreatedResponse(BaseModel):
    id: int
    slug: str
    message: str


class SlugMessageResponse(BaseModel):
    slug: str
    message: str


class MessageResponse(BaseModel):
    message: str
