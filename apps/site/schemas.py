"""
Pydantic schemas for the site section endpoints.
"""
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ServiceItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None


class HomeUpdate(BaseModel):
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_image: Optional[str] = None
    about_section_title: Optional[str] = None
    about_section_content: Optional[str] = None
    about_section_image: Optional[str] = None
    services_section_title: Optional[str] = None
    # None leaves the services untouched, a list replaces them
    services: Optional[list[ServiceItem]] = None


class AboutUpdate(BaseModel):
    content: str = ""
    plaintext: str = ""
    skills: list[str] = Field(default_factory=list)
    experience: list[dict[str, Any]] = Field(default_factory=list)
    education: list[dict[str, Any]] = Field(default_factory=list)
    certifications: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, value):
        """Accept "Python, SQL" as well as ["Python", "SQL"]."""
        if value is None:
            return []
        if isinstance(value, str):
            return [skill.strip() for skill in value.split(",") if skill.strip()]
        return value


class ContactUpdate(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    instagram_url: Optional[str] = None


class ContactMessageCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    subject: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1)


class ContactMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    subject: Optional[str] = None
    message: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NavigationLink(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=500)


class SocialLink(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    platform: str = Field(..., min_length=1, max_length=50)
    url: str = Field(..., min_length=1, max_length=500)
    icon: Optional[str] = None


class FooterUpdate(BaseModel):
    logo: Optional[str] = None
    description: Optional[str] = None
    copyright_text: Optional[str] = None
    navigation_links: Optional[list[NavigationLink]] = None
    social_links: Optional[list[SocialLink]] = None


class NavbarLink(NavigationLink):
    order_index: int = 0


class NavbarUpdate(BaseModel):
    site_title: Optional[str] = None
    logo: Optional[str] = None
    navigation_links: Optional[list[NavbarLink]] = None


class MessageResponse(BaseModel):
    message: str
