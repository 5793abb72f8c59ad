"""
tests/test_upload.py
"""
import os
from io import BytesIO

from apps.shared import config

from conftest import upload_exists


def _image(name="photo.png", content=b"\x89PNG fake", content_type="image/png"):
    return (name, BytesIO(content), content_type)


def test_single_upload_stores_file(admin_client):
    rv = admin_client.post("/api/upload/single", files={"image": _image()})

    assert rv.status_code == 200
    body = rv.json()
    assert body["success"] is True
    assert body["imageUrl"].startswith("/uploads/")
    assert body["imageUrl"].endswith(".png")
    assert upload_exists(body["imageUrl"])


def test_uploaded_file_is_served(admin_client, client):
    url = admin_client.post("/api/upload/single", files={"image": _image(content=b"pixels")}).json()["imageUrl"]

    rv = client.get(url)

    assert rv.status_code == 200
    assert rv.content == b"pixels"


def test_upload_gets_unique_names(admin_client):
    first = admin_client.post("/api/upload/single", files={"image": _image()}).json()["imageUrl"]
    second = admin_client.post("/api/upload/single", files={"image": _image()}).json()["imageUrl"]
    assert first != second


def test_non_image_is_rejected(admin_client):
    rv = admin_client.post("/api/upload/single", files={"image": _image("notes.txt", b"hi", "text/plain")})
    assert rv.status_code == 400


def test_oversized_image_is_rejected(admin_client, monkeypatch):
    monkeypatch.setattr(config, "MAX_UPLOAD_SIZE", 4)
    rv = admin_client.post("/api/upload/single", files={"image": _image(content=b"too big")})
    assert rv.status_code == 400


def test_multiple_upload(admin_client):
    rv = admin_client.post(
        "/api/upload/multiple",
        files=[("images", _image("a.jpg", content_type="image/jpeg")), ("images", _image("b.gif", content_type="image/gif"))],
    )

    assert rv.status_code == 200
    urls = rv.json()["imageUrls"]
    assert len(urls) == 2
    assert all(upload_exists(url) for url in urls)


def test_multiple_upload_with_one_bad_file_writes_nothing(admin_client):
    rv = admin_client.post(
        "/api/upload/multiple",
        files=[("images", _image()), ("images", _image("x.txt", b"x", "text/plain"))],
    )

    assert rv.status_code == 400
    assert os.listdir(config.UPLOAD_DIR) == []


def test_multiple_upload_with_oversized_later_file_leaves_nothing(admin_client, monkeypatch):
    monkeypatch.setattr(config, "MAX_UPLOAD_SIZE", 10)
    rv = admin_client.post(
        "/api/upload/multiple",
        files=[("images", _image("a.png", b"small")), ("images", _image("b.png", b"x" * 50))],
    )

    assert rv.status_code == 400
    assert os.listdir(config.UPLOAD_DIR) == []


def test_multiple_upload_limit(admin_client):
    files = [("images", _image(f"{i}.png")) for i in range(11)]
    rv = admin_client.post("/api/upload/multiple", files=files)
    assert rv.status_code == 400


def test_upload_requires_admin(client, editor_client):
    assert client.post("/api/upload/single", files={"image": _image()}).status_code == 401
    assert editor_client.post("/api/upload/single", files={"image": _image()}).status_code == 403
