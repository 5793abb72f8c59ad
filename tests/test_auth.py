"""
tests/test_auth.py
"""
from datetime import timedelta

from fastapi.testclient import TestClient

from app.main import app
from apps.auth.create_admin import create_admin_user
from apps.auth.models import User
from apps.shared.auth import TOKEN_COOKIE, create_access_token, verify_password

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def test_login_sets_httponly_cookie(client):
    create_admin_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD)

    rv = client.post("/api/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD})

    assert rv.status_code == 200
    assert rv.json()["user"]["email"] == ADMIN_EMAIL
    assert rv.json()["user"]["role"] == "admin"
    set_cookie = rv.headers["set-cookie"]
    assert set_cookie.startswith(f"{TOKEN_COOKIE}=")
    assert "HttpOnly" in set_cookie
    assert "samesite=strict" in set_cookie.lower()
    assert "Max-Age=86400" in set_cookie


def test_login_with_wrong_password_is_401(client):
    create_admin_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD)

    rv = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"})

    assert rv.status_code == 401
    assert rv.json()["detail"] == "Invalid email or password"


def test_me_requires_token(client):
    rv = client.get("/api/auth/me")
    assert rv.status_code == 401
    assert rv.json()["detail"] == "Token not found"


def test_me_and_logout(admin_client):
    rv = admin_client.get("/api/auth/me")
    assert rv.status_code == 200
    assert rv.json()["email"] == ADMIN_EMAIL

    assert admin_client.post("/api/auth/logout").status_code == 200
    assert admin_client.get("/api/auth/me").status_code == 401


def test_forged_and_expired_tokens_are_rejected(db):
    create_admin_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD)
    admin = db.query(User).filter(User.email == ADMIN_EMAIL).one()

    forged = TestClient(app, cookies={TOKEN_COOKIE: "not-a-jwt"})
    assert forged.get("/api/auth/me").json()["detail"] == "Invalid token"

    expired_token = create_access_token(admin, expires_delta=timedelta(seconds=-10))
    expired = TestClient(app, cookies={TOKEN_COOKIE: expired_token})
    assert expired.get("/api/auth/me").status_code == 401


def test_token_for_deleted_user_is_rejected(db):
    create_admin_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD)
    admin = db.query(User).filter(User.email == ADMIN_EMAIL).one()
    token = create_access_token(admin)
    db.delete(admin)
    db.commit()

    rv = TestClient(app, cookies={TOKEN_COOKIE: token}).get("/api/auth/me")

    assert rv.status_code == 401
    assert rv.json()["detail"] == "Invalid user"


def test_create_admin_is_idempotent():
    assert create_admin_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD) is True
    assert create_admin_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD) is False


def test_register_and_manage_users(admin_client, db):
    rv = admin_client.post("/api/auth/register", json={
        "name": "Writer",
        "email": "Writer@Example.test",
        "password": "secret1",
    })
    assert rv.status_code == 201

    users = admin_client.get("/api/auth/users").json()
    writer = next(u for u in users if u["email"] == "writer@example.test")
    assert writer["role"] == "editor"
    assert "password" not in writer

    rv = admin_client.put(f"/api/auth/users/{writer['id']}", json={
        "name": "Senior Writer",
        "email": "writer@example.test",
        "role": "admin",
        "password": "new-secret",
    })
    assert rv.status_code == 200
    stored = db.get(User, writer["id"])
    assert stored.name == "Senior Writer"
    assert stored.role == "admin"
    assert verify_password("new-secret", stored.password)

    assert admin_client.delete(f"/api/auth/users/{writer['id']}").status_code == 200
    assert admin_client.delete(f"/api/auth/users/{writer['id']}").status_code == 404


def test_register_duplicate_email_is_400(admin_client):
    rv = admin_client.post("/api/auth/register", json={
        "name": "Copy",
        "email": ADMIN_EMAIL,
        "password": "secret1",
    })
    assert rv.status_code == 400


def test_admin_cannot_delete_self(admin_client):
    me = admin_client.get("/api/auth/me").json()
    rv = admin_client.delete(f"/api/auth/users/{me['id']}")
    assert rv.status_code == 400


def test_editor_cannot_manage_users(editor_client):
    assert editor_client.get("/api/auth/users").status_code == 403
