"""
Bootstrap the first admin user.

    ADMIN_EMAIL=me@example.com ADMIN_PASSWORD=... python -m apps.auth.create_admin
"""
import os
import sys
import logging

from apps.shared.database import SessionLocal, Base, engine
from apps.shared.auth import hash_password
from apps.auth.models import User

logger = logging.getLogger(__name__)


def create_admin_user(name: str, email: str, password: str) -> bool:
    """Create an admin account. Returns False if the email already exists."""
    db = SessionLocal()
    try:
        email = email.strip().lower()
        if db.query(User).filter(User.email == email).first():
            logger.info(f"Admin user already exists: {email}")
            return False

        db.add(User(name=name, email=email, password=hash_password(password), role="admin"))
        db.commit()
        logger.info(f"Admin user created: {email}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating admin user: {e}", exc_info=True)
        raise
    finally:
        db.close()


def main() -> int:
    logging.basicConfig(level=logging.INFO)

    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    name = os.getenv("ADMIN_NAME", "Admin")
    if not email or not password or len(password) < 6:
        logger.error("Set ADMIN_EMAIL and ADMIN_PASSWORD (at least 6 characters)")
        return 1

    Base.metadata.create_all(bind=engine)
    create_admin_user(name, email, password)
    return 0


if __name__ == "__main__":
    sys.exit(main())
