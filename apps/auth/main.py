"""
Auth API

Login/logout with a JWT cookie, current-user lookup and admin-only
user management.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from apps.shared.database import get_db
from apps.shared.auth import (
    clear_auth_cookie,
    create_access_token,
    get_current_user,
    hash_password,
    require_admin,
    set_auth_cookie,
    verify_password,
)
from apps.auth.models import User
from apps.auth.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Verify credentials and set the token cookie."""
    user = db.query(User).filter(User.email == _normalize_email(credentials.email)).first()
    if not user or not verify_password(credentials.password, user.password):
        logger.info("Failed login attempt")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    set_auth_cookie(response, create_access_token(user))
    logger.info(f"User {user.id} logged in")
    return LoginResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    clear_auth_cookie(response)
    return {"message": "Logged out"}


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(
    payload: RegisterRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a user (admin only)."""
    email = _normalize_email(payload.email)
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email address is already in use")

    db.add(User(
        name=payload.name,
        email=email,
        password=hash_password(payload.password),
        role=payload.role,
    ))
    db.commit()
    return {"message": "User created"}


@router.get("/users", response_model=list[UserResponse])
def list_users(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id.asc()).all()


@router.put("/users/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: int,
    payload: UserUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Update name, email, role and optionally the password of a user."""
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    email = _normalize_email(payload.email)
    taken = db.query(User).filter(User.email == email, User.id != user_id).first()
    if taken:
        raise HTTPException(status_code=400, detail="Email address is already in use")

    user.name = payload.name
    user.email = email
    user.role = payload.role
    if payload.password:
        user.password = hash_password(payload.password)

    db.commit()
    return {"message": "User updated"}


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")

    deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    if deleted == 0:
        raise HTTPException(status_code=404, detail="User not found")

    db.commit()
    return {"message": "User deleted"}
