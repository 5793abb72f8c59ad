"""
Atomic upserts for single-row tables

Site sections (home, about, contact, footer, navbar, meta settings) are
stored as one row with id=1. Writing them uses INSERT ... ON CONFLICT (id)
DO UPDATE so a missing row is created and an existing one replaced in a
single statement, without the check-then-insert race.

Usage:
    from apps.shared.upsert import upsert_singleton

    upsert_singleton(db, Contact, {"email": "me@example.com", "phone": None})
    db.commit()
"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from typing import Type, Any, Dict
from apps.shared.database import Base

SINGLETON_ID = 1

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def upsert_singleton(
    db: Session,
    model: Type[Base],
    data: Dict[str, Any],
    auto_update_timestamp: bool = True,
    timestamp_field: str = "updated_at"
) -> None:
    """
    Insert or replace the id=1 row of a singleton table.

    Args:
        db: SQLAlchemy database session (caller commits)
        model: SQLAlchemy model class (e.g. Home, Contact)
        data: column values to write; 'id' must not be included
        auto_update_timestamp: If True, set timestamp_field to NOW() on update
        timestamp_field: Name of timestamp field to auto-update

    Raises:
        ValueError: If data includes 'id', names an unknown column, the model
            lacks timestamp_field, or the database dialect is unsupported
    """
    if "id" in data:
        raise ValueError("data must not include 'id'; singleton rows always use id=1")

    if not data and not auto_update_timestamp:
        raise ValueError("Nothing to write: data is empty and timestamp update is disabled")

    for key in data:
        if not hasattr(model, key):
            raise ValueError(f"Model {model.__name__} does not have field '{key}'")

    if auto_update_timestamp and not hasattr(model, timestamp_field):
        raise ValueError(f"Model {model.__name__} does not have field '{timestamp_field}'")

    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise ValueError(f"Upsert not supported for dialect '{dialect}'")

    stmt = insert(model).values(id=SINGLETON_ID, **data)

    # excluded.<column> references the value that would have been inserted
    update_dict = {key: getattr(stmt.excluded, key) for key in data}
    if auto_update_timestamp:
        update_dict[timestamp_field] = func.now()

    stmt = stmt.on_conflict_do_update(index_elements=["id"], set_=update_dict)

    db.execute(stmt)
