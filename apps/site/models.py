"""
Site section models.

Each section (home, about, contact, footer, navbar, meta settings) is a
single row with id=1. Repeating parts (services, links) live in child
tables that are replaced wholesale on update.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, func

from apps.shared.database import Base


class Home(Base):
    __tablename__ = "home"

    id = Column(Integer, primary_key=True)
    hero_title = Column(String(255))
    hero_subtitle = Column(Text)
    hero_image = Column(String(500))
    about_section_title = Column(String(255))
    about_section_content = Column(Text)
    about_section_image = Column(String(500))
    services_section_title = Column(String(255))
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    title = Column(String(255))
    description = Column(Text)
    icon = Column(String(100))


class About(Base):
    __tablename__ = "about"

    id = Column(Integer, primary_key=True)
    content = Column(Text)
    plaintext = Column(Text)
    skills = Column(JSON, default=list)  # ["Python", "React"]
    experience = Column(JSON, default=list)  # [{company, position, duration, description}]
    education = Column(JSON, default=list)  # [{school, degree, duration, description}]
    certifications = Column(JSON, default=list)  # [{name, issuer, year, url}]
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Contact(Base):
    __tablename__ = "contact"

    id = Column(Integer, primary_key=True)
    email = Column(String(255))
    phone = Column(String(50))
    address = Column(Text)
    github_url = Column(String(500))
    linkedin_url = Column(String(500))
    twitter_url = Column(String(500))
    instagram_url = Column(String(500))
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255))
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())


class Footer(Base):
    __tablename__ = "footer"

    id = Column(Integer, primary_key=True)
    logo = Column(String(500))
    description = Column(Text)
    copyright_text = Column(String(255))
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class FooterNavigationLink(Base):
    __tablename__ = "footer_navigation_links"

    id = Column(Integer, primary_key=True)
    title = Column(String(100), nullable=False)
    url = Column(String(500), nullable=False)


class FooterSocialLink(Base):
    __tablename__ = "footer_social_links"

    id = Column(Integer, primary_key=True)
    platform = Column(String(50), nullable=False)
    url = Column(String(500), nullable=False)
    icon = Column(String(100))


class Navbar(Base):
    __tablename__ = "navbar"

    id = Column(Integer, primary_key=True)
    site_title = Column(String(255))
    logo = Column(String(500))
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class NavbarNavigationLink(Base):
    __tablename__ = "navbar_navigation_links"

    id = Column(Integer, primary_key=True)
    title = Column(String(100), nullable=False)
    url = Column(String(500), nullable=False)
    order_index = Column(Integer, nullable=False, default=0)


class MetaSettings(Base):
    __tablename__ = "meta_settings"

    id = Column(Integer, primary_key=True)
    site_title = Column(String(255))
    site_description = Column(Text)
    site_keywords = Column(Text)
    og_image = Column(String(500))
    favicon = Column(String(500))
    twitter_handle = Column(String(100))
    facebook_app_id = Column(String(100))
    google_analytics_id = Column(String(100))
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "site_title": self.site_title,
            "site_description": self.site_description,
            "site_keywords": self.site_keywords,
            "og_image": self.og_image,
            "favicon": self.favicon,
            "twitter_handle": self.twitter_handle,
            "facebook_app_id": self.facebook_app_id,
            "google_analytics_id": self.google_analytics_id,
        }


DEFAULT_META_SETTINGS = {
    "site_title": "Portfolio",
    "site_description": "Personal portfolio website",
    "site_keywords": "portfolio, web development, projects",
    "og_image": None,
    "favicon": None,
    "twitter_handle": "",
    "facebook_app_id": "",
    "google_analytics_id": "",
}
