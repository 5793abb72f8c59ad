"""
View counting

Increments an entity's view counter at most once per browser session.
The set of already-counted entities lives in the server-managed session
(Starlette SessionMiddleware), keyed as "{kind}-{slug}".

Two requests from the same session racing before the session cookie is
written back can both count; views from different sessions always count.
"""
import enum
import logging
from typing import MutableMapping

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ViewResult(enum.Enum):
    RECORDED = "recorded"
    ALREADY_VIEWED = "already_viewed"
    NOT_FOUND = "not_found"


class ViewedEntities:
    """Typed view of the session's viewed-entity keys."""

    SESSION_KEY = "viewed_entities"

    def __init__(self, session: MutableMapping):
        self._session = session

    @staticmethod
    def key(kind: str, slug: str) -> str:
        return f"{kind}-{slug}"

    def _keys(self) -> list:
        return self._session.get(self.SESSION_KEY, [])

    def __contains__(self, key: str) -> bool:
        return key in self._keys()

    def __len__(self) -> int:
        return len(self._keys())

    def add(self, key: str) -> None:
        keys = self._keys()
        if key not in keys:
            # Reassign so the session notices the change and re-signs the cookie
            self._session[self.SESSION_KEY] = keys + [key]


def record_view(db: Session, viewed: ViewedEntities, kind: str, model, slug: str) -> ViewResult:
    """Bump model.views for slug unless this session already counted it."""
    key = ViewedEntities.key(kind, slug)
    if key in viewed:
        return ViewResult.ALREADY_VIEWED

    updated = (
        db.query(model)
        .filter(model.slug == slug)
        .update({model.views: model.views + 1}, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        return ViewResult.NOT_FOUND

    db.commit()
    viewed.add(key)
    logger.debug(f"View recorded: {key}")
    return ViewResult.RECORDED
