"""
Blog database models.

A blog post plus its cover/gallery image rows.
"""
from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, func
from sqlalchemy.orm import relationship

from apps.shared.database import Base
from apps.shared.content import split_images


class Blog(Base):
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)  # Rich HTML from the editor
    plaintext = Column(Text, nullable=False)  # Plain-text mirror for search/excerpts
    excerpt = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="draft", index=True)  # published | draft
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    images = relationship(
        "BlogImage",
        order_by="BlogImage.id",
        lazy="selectin",
        viewonly=True,
    )

    @property
    def cover_image(self):
        return split_images(self.images)[0]

    @property
    def gallery_images(self):
        return split_images(self.images)[1]


class BlogImage(Base):
    __tablename__ = "blog_images"

    id = Column(Integer, primary_key=True)
    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), index=True, nullable=False)
    image_url = Column(String(500), nullable=False)
    type = Column(String(20), nullable=False)  # cover | gallery
    created_at = Column(DateTime, server_default=func.now())
