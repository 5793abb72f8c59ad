"""
tests/test_upsert.py

Single-row upserts: insert then update, timestamp handling, and input
validation.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from apps.shared.database import SessionLocal
from apps.shared.upsert import SINGLETON_ID, upsert_singleton
from apps.site.models import About, Contact


def test_insert_then_update(db):
    upsert_singleton(db, Contact, {"email": "first@example.test", "phone": "1"})
    db.commit()

    record = db.get(Contact, SINGLETON_ID)
    assert record.email == "first@example.test"
    assert record.updated_at is not None

    upsert_singleton(db, Contact, {"email": "second@example.test", "phone": None})
    db.commit()
    db.expire_all()

    assert db.query(Contact).count() == 1
    record = db.get(Contact, SINGLETON_ID)
    assert record.email == "second@example.test"
    assert record.phone is None


def test_json_columns(db):
    upsert_singleton(db, About, {"skills": ["Python"], "experience": [{"company": "Acme"}]})
    db.commit()

    record = db.get(About, SINGLETON_ID)
    assert record.skills == ["Python"]
    assert record.experience == [{"company": "Acme"}]


def test_concurrent_writers_leave_one_row(db):
    def write(i):
        session = SessionLocal()
        try:
            upsert_singleton(session, Contact, {"email": f"writer{i}@example.test"})
            session.commit()
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(write, range(8)))

    assert db.query(Contact).count() == 1
    assert db.get(Contact, SINGLETON_ID).email.startswith("writer")


def test_rejects_id_in_data(db):
    with pytest.raises(ValueError, match="id"):
        upsert_singleton(db, Contact, {"id": 2, "email": "x@example.test"})


def test_rejects_unknown_field(db):
    with pytest.raises(ValueError, match="does not have field 'nope'"):
        upsert_singleton(db, Contact, {"nope": 1})


def test_rejects_empty_write_without_timestamp(db):
    with pytest.raises(ValueError, match="Nothing to write"):
        upsert_singleton(db, Contact, {}, auto_update_timestamp=False)


def test_rejects_missing_timestamp_field(db):
    with pytest.raises(ValueError, match="modified_at"):
        upsert_singleton(db, Contact, {"email": "x@example.test"}, timestamp_field="modified_at")
