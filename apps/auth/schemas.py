"""
Pydantic schemas for authentication and user management.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

Role = Literal["admin", "editor"]


class LoginRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6)
    role: Role = "editor"


class UserUpdate(BaseModel):
    """Admin edit of a user. Password is changed only when provided."""
    name: str = Field(..., min_length=2, max_length=255)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    role: Role
    password: Optional[str] = Field(None, min_length=6)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
