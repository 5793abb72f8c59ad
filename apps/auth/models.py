"""
User accounts for the admin dashboard.
"""
from sqlalchemy import Column, Integer, String, DateTime, func

from apps.shared.database import Base

ROLES = ("admin", "editor")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # pbkdf2_sha256 hash
    role = Column(String(20), nullable=False, default="editor")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
