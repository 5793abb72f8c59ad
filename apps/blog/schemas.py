"""
Pydantic schemas for Blog API.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

BlogStatus = Literal["published", "draft"]


class BlogPayload(BaseModel):
    """Request body for create and update (full replacement)."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    plaintext: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1)
    status: BlogStatus
    cover_image: Optional[str] = Field(None, alias="coverImage", max_length=500)
    gallery_images: list[str] = Field(default_factory=list, alias="galleryImages")

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


class BlogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    content: str
    plaintext: str
    excerpt: str
    status: str
    views: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    cover_image: Optional[str] = Field(None, serialization_alias="coverImage")
    gallery_images: list[str] = Field(default_factory=list, serialization_alias="galleryImages")


class BlogCreatedResponse(BaseModel):
    id: int
    slug: str
    message: str


class SlugMessageResponse(BaseModel):
    slug: str
    message: str


class MessageResponse(BaseModel):
    message: str
