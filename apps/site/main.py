"""
Site sections API

Single-record sections of the public site: home, about, contact, footer,
navbar and meta (SEO) settings, plus visitor contact messages.
Reads are public; replacing a section requires the admin role.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from apps.shared.database import get_db
from apps.shared.auth import require_admin
from apps.shared.upsert import SINGLETON_ID, upsert_singleton
from apps.shared.uploads import remove_uploaded_files, save_image_upload
from apps.site.models import (
    About,
    Contact,
    ContactMessage,
    DEFAULT_META_SETTINGS,
    Footer,
    FooterNavigationLink,
    FooterSocialLink,
    Home,
    MetaSettings,
    Navbar,
    NavbarNavigationLink,
    Service,
)
from apps.site.schemas import (
    AboutUpdate,
    ContactMessageCreate,
    ContactMessageResponse,
    ContactUpdate,
    FooterUpdate,
    HomeUpdate,
    MessageResponse,
    NavbarUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["site"])


def _row_dict(row) -> dict:
    """Column values of a model instance, or {} when the row does not exist."""
    if row is None:
        return {}
    return {
        column.name: getattr(row, column.name)
        for column in row.__table__.columns
    }


def _singleton(db: Session, model):
    return db.get(model, SINGLETON_ID)


# ──────────────────────────────────────────────────────────────────────────────
# Home
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/home")
def get_home(db: Session = Depends(get_db)):
    """Home page content with its services."""
    home = _singleton(db, Home)
    if not home:
        raise HTTPException(status_code=404, detail="Home content not found")

    services = db.query(Service).order_by(Service.id.asc()).all()
    return {
        **_row_dict(home),
        "services": [_row_dict(service) for service in services],
    }


@router.put("/home", response_model=MessageResponse)
def update_home(payload: HomeUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    data = payload.model_dump(exclude={"services"})
    try:
        upsert_singleton(db, Home, data)
        if payload.services is not None:
            db.query(Service).delete(synchronize_session=False)
            db.add_all(Service(**service.model_dump()) for service in payload.services)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"message": "Home content updated"}


# ──────────────────────────────────────────────────────────────────────────────
# About
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/about")
def get_about(db: Session = Depends(get_db)):
    return _row_dict(_singleton(db, About))


@router.put("/about", response_model=MessageResponse)
def update_about(payload: AboutUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    upsert_singleton(db, About, payload.model_dump())
    db.commit()
    return {"message": "About content updated"}


# ──────────────────────────────────────────────────────────────────────────────
# Contact details and visitor messages
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/contact")
def get_contact(db: Session = Depends(get_db)):
    return _row_dict(_singleton(db, Contact))


@router.put("/contact", response_model=MessageResponse)
def update_contact(payload: ContactUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    upsert_singleton(db, Contact, payload.model_dump())
    db.commit()
    return {"message": "Contact details updated"}


@router.post("/contact/messages", response_model=MessageResponse, status_code=201)
def create_contact_message(payload: ContactMessageCreate, db: Session = Depends(get_db)):
    """Public contact form submission."""
    db.add(ContactMessage(**payload.model_dump()))
    db.commit()
    logger.info("Contact message received")
    return {"message": "Message sent"}


@router.get("/contact/messages", response_model=list[ContactMessageResponse])
def list_contact_messages(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return (
        db.query(ContactMessage)
        .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        .all()
    )


@router.delete("/contact/messages/{message_id}", response_model=MessageResponse)
def delete_contact_message(message_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    deleted = (
        db.query(ContactMessage)
        .filter(ContactMessage.id == message_id)
        .delete(synchronize_session=False)
    )
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Message not found")
    db.commit()
    return {"message": "Message deleted"}


# ──────────────────────────────────────────────────────────────────────────────
# Footer and navbar
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/footer")
def get_footer(db: Session = Depends(get_db)):
    navigation = db.query(FooterNavigationLink).order_by(FooterNavigationLink.id.asc()).all()
    social = db.query(FooterSocialLink).order_by(FooterSocialLink.id.asc()).all()
    return {
        **_row_dict(_singleton(db, Footer)),
        "navigation_links": [_row_dict(link) for link in navigation],
        "social_links": [_row_dict(link) for link in social],
    }


@router.put("/footer", response_model=MessageResponse)
def update_footer(payload: FooterUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    try:
        upsert_singleton(db, Footer, payload.model_dump(exclude={"navigation_links", "social_links"}))
        if payload.navigation_links is not None:
            db.query(FooterNavigationLink).delete(synchronize_session=False)
            db.add_all(FooterNavigationLink(**link.model_dump()) for link in payload.navigation_links)
        if payload.social_links is not None:
            db.query(FooterSocialLink).delete(synchronize_session=False)
            db.add_all(FooterSocialLink(**link.model_dump()) for link in payload.social_links)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"message": "Footer updated"}


@router.get("/navbar")
def get_navbar(db: Session = Depends(get_db)):
    links = (
        db.query(NavbarNavigationLink)
        .order_by(NavbarNavigationLink.order_index.asc(), NavbarNavigationLink.id.asc())
        .all()
    )
    return {
        **_row_dict(_singleton(db, Navbar)),
        "navigation_links": [_row_dict(link) for link in links],
    }


@router.put("/navbar", response_model=MessageResponse)
def update_navbar(payload: NavbarUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    try:
        upsert_singleton(db, Navbar, payload.model_dump(exclude={"navigation_links"}))
        if payload.navigation_links is not None:
            db.query(NavbarNavigationLink).delete(synchronize_session=False)
            db.add_all(NavbarNavigationLink(**link.model_dump()) for link in payload.navigation_links)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"message": "Navbar updated"}


# ──────────────────────────────────────────────────────────────────────────────
# Meta (SEO) settings
# ──────────────────────────────────────────────────────────────────────────────

def get_or_create_meta_settings(db: Session) -> MetaSettings:
    """Return the settings row, inserting the defaults on first access."""
    settings = _singleton(db, MetaSettings)
    if settings is None:
        settings = MetaSettings(id=SINGLETON_ID, **DEFAULT_META_SETTINGS)
        db.add(settings)
        db.commit()
        logger.info("Created default meta settings")
    return settings


def apply_meta_settings(db: Session, fields: dict, images: dict) -> tuple[dict, list[str]]:
    """
    Write the settings row in one commit.

    `images` maps og_image / favicon to newly stored upload URLs. Returns the
    updated settings and the URLs of the images they replaced.
    """
    settings = get_or_create_meta_settings(db)
    replaced = []
    for key, value in fields.items():
        setattr(settings, key, value)
    for key, new_url in images.items():
        if getattr(settings, key):
            replaced.append(getattr(settings, key))
        setattr(settings, key, new_url)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(settings)
    return settings.to_dict(), replaced


@router.get("/meta-settings")
def get_meta_settings(db: Session = Depends(get_db)):
    return get_or_create_meta_settings(db).to_dict()


@router.put("/meta-settings")
async def update_meta_settings(
    site_title: Optional[str] = Form(None),
    site_description: Optional[str] = Form(None),
    site_keywords: Optional[str] = Form(None),
    twitter_handle: Optional[str] = Form(None),
    facebook_app_id: Optional[str] = Form(None),
    google_analytics_id: Optional[str] = Form(None),
    og_image: Optional[UploadFile] = File(None),
    favicon: Optional[UploadFile] = File(None),
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Replace the meta settings (multipart form).
    New og_image / favicon files replace the previous ones, which are
    removed from disk after the update commits. If any upload or the
    database write fails, the files stored by this request are removed.
    """
    fields = {
        "site_title": site_title,
        "site_description": site_description,
        "site_keywords": site_keywords,
        "twitter_handle": twitter_handle,
        "facebook_app_id": facebook_app_id,
        "google_analytics_id": google_analytics_id,
    }
    images = {}
    try:
        for key, upload in (("og_image", og_image), ("favicon", favicon)):
            if upload is not None and upload.filename:
                images[key] = await save_image_upload(upload, subdir="meta")
        result, replaced = await run_in_threadpool(apply_meta_settings, db, fields, images)
    except Exception:
        remove_uploaded_files(images.values())
        raise

    remove_uploaded_files(replaced)
    return result
