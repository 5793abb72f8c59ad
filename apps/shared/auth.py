"""
Cookie-based JWT authentication

Login issues a signed JWT in an httpOnly, SameSite=strict cookie valid for
24 hours. Write endpoints depend on require_admin, which verifies the
token, checks that the user still exists and that it has the admin role.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from apps.auth.models import User
from apps.shared import config
from apps.shared.database import get_db

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"
JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plain-text password for storage."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(hours=config.TOKEN_TTL_HOURS)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=JWT_ALGORITHM)


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=config.TOKEN_TTL_HOURS * 60 * 60,
        httponly=True,
        secure=config.ENVIRONMENT == "production",
        samesite="strict",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        TOKEN_COOKIE,
        httponly=True,
        secure=config.ENVIRONMENT == "production",
        samesite="strict",
    )


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Dependency resolving the logged-in user from the token cookie.

    Usage in endpoints:
    @router.get("/me")
    def me(user: User = Depends(get_current_user)):
        ...
    """
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise _unauthorized("Token not found")

    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[JWT_ALGORITHM])
        user_id = int(payload["sub"])
    except (JWTError, KeyError, ValueError):
        logger.info(f"Rejected invalid token on {request.url.path}")
        raise _unauthorized("Invalid token")

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("Invalid user")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency for write endpoints: the user must have the admin role."""
    if user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not allowed to perform this action",
        )
    return user
