"""
Content-with-images write path

Create, update and delete a blog or project together with its ordered set
of cover/gallery image rows. Database writes run in a single transaction;
files that lose their last reference are removed from disk only after the
transaction commits.
"""
import logging
from typing import Any, Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apps.shared.errors import ContentNotFoundError, DuplicateTitleError, InvalidTitleError
from apps.shared.slugs import slugify
from apps.shared.uploads import remove_uploaded_files

logger = logging.getLogger(__name__)

COVER = "cover"
GALLERY = "gallery"


def split_images(images: Iterable[Any]) -> tuple[Optional[str], list[str]]:
    """Return (first cover URL or None, gallery URLs in insertion order)."""
    cover = None
    gallery = []
    for image in images:
        if image.type == COVER:
            if cover is None:
                cover = image.image_url
        elif image.type == GALLERY:
            gallery.append(image.image_url)
    return cover, gallery


class ContentWriter:
    """
    Write path for one content entity type (Blog or Project).

    Args:
        model: SQLAlchemy model of the entity (must have id, slug, title)
        image_model: SQLAlchemy model of its image rows (image_url, type)
        owner_field: foreign key column on image_model (e.g. "blog_id")
        label: human name used in errors and logs ("Blog", "Project")
        rewrite_slug_on_update: recompute the slug from the new title on update
    """

    def __init__(self, model, image_model, owner_field: str, label: str,
                 rewrite_slug_on_update: bool):
        self.model = model
        self.image_model = image_model
        self.owner_field = owner_field
        self.label = label
        self.rewrite_slug_on_update = rewrite_slug_on_update

    @property
    def _owner_column(self):
        return getattr(self.image_model, self.owner_field)

    def _slug_for(self, title: str) -> str:
        slug = slugify(title)
        if not slug:
            raise InvalidTitleError("Title must contain at least one letter or digit")
        return slug

    def _image_urls(self, db: Session, entity_id: int) -> list[str]:
        rows = (
            db.query(self.image_model.image_url)
            .filter(self._owner_column == entity_id)
            .order_by(self.image_model.id.asc())
            .all()
        )
        return [row.image_url for row in rows]

    def _insert_images(self, db: Session, entity_id: int,
                       cover_image: Optional[str], gallery_images: list[str]) -> None:
        if cover_image:
            db.add(self.image_model(**{self.owner_field: entity_id, "image_url": cover_image, "type": COVER}))
        for url in gallery_images or []:
            db.add(self.image_model(**{self.owner_field: entity_id, "image_url": url, "type": GALLERY}))
        db.flush()

    @staticmethod
    def _is_slug_conflict(error: IntegrityError) -> bool:
        """True when the violated constraint is the unique slug (SQLite or PostgreSQL wording)."""
        message = str(error.orig).lower()
        return "unique" in message and "slug" in message

    def _resolve(self, db: Session, slug: str):
        entity = db.query(self.model).filter(self.model.slug == slug).first()
        if entity is None:
            raise ContentNotFoundError(self.label, slug)
        return entity

    def create(self, db: Session, fields: dict, cover_image: Optional[str] = None,
               gallery_images: Optional[list[str]] = None):
        """
        Insert the entity and its images in one transaction.

        Returns the committed entity. Raises DuplicateTitleError when the
        derived slug is taken, InvalidTitleError when it is empty.
        """
        slug = self._slug_for(fields["title"])
        try:
            entity = self.model(**fields, slug=slug)
            db.add(entity)
            db.flush()
            self._insert_images(db, entity.id, cover_image, gallery_images or [])
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if self._is_slug_conflict(e):
                raise DuplicateTitleError(self.label, slug)
            raise
        except Exception:
            db.rollback()
            raise

        db.refresh(entity)
        logger.info(f"{self.label} created: {slug} (id={entity.id})")
        return entity

    def update(self, db: Session, current_slug: str, fields: dict,
               cover_image: Optional[str] = None,
               gallery_images: Optional[list[str]] = None) -> str:
        """
        Replace scalar fields and the whole image set in one transaction.

        Returns the effective slug. Image files referenced before but not
        after the update are deleted once the transaction has committed;
        on any failure the transaction is rolled back and no file is touched.
        """
        gallery_images = list(gallery_images or [])
        slug = current_slug
        try:
            entity = self._resolve(db, current_slug)
            old_urls = self._image_urls(db, entity.id)

            for key, value in fields.items():
                setattr(entity, key, value)
            if self.rewrite_slug_on_update:
                slug = self._slug_for(fields.get("title", entity.title))
                entity.slug = slug

            db.query(self.image_model).filter(
                self._owner_column == entity.id
            ).delete(synchronize_session=False)
            self._insert_images(db, entity.id, cover_image, gallery_images)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if self._is_slug_conflict(e):
                raise DuplicateTitleError(self.label, slug)
            raise
        except Exception:
            db.rollback()
            raise

        kept = set(gallery_images)
        if cover_image:
            kept.add(cover_image)
        orphaned = [url for url in old_urls if url not in kept]
        remove_uploaded_files(orphaned)

        logger.info(f"{self.label} updated: {current_slug} -> {slug}")
        return slug

    def delete(self, db: Session, slug: str) -> list[str]:
        """
        Delete the entity and its image rows in one transaction, then its files.

        Returns the image URLs that were owned by the entity.
        """
        try:
            entity = self._resolve(db, slug)
            entity_id = entity.id
            old_urls = self._image_urls(db, entity_id)

            db.query(self.image_model).filter(
                self._owner_column == entity_id
            ).delete(synchronize_session=False)
            deleted = (
                db.query(self.model)
                .filter(self.model.id == entity_id)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                raise ContentNotFoundError(self.label, slug)
            db.commit()
        except Exception:
            db.rollback()
            raise

        remove_uploaded_files(old_urls)
        logger.info(f"{self.label} deleted: {slug} (id={entity_id})")
        return old_urls
