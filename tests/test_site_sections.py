"""
tests/test_site_sections.py
"""
import os
from io import BytesIO

from apps.shared import config

from conftest import upload_exists


def test_home_is_404_until_written(admin_client, client):
    assert client.get("/api/home").status_code == 404

    rv = admin_client.put("/api/home", json={
        "hero_title": "Hi, I build things",
        "services": [
            {"title": "Web", "description": "Sites", "icon": "globe"},
            {"title": "APIs", "description": "Backends", "icon": "server"},
        ],
    })
    assert rv.status_code == 200

    body = client.get("/api/home").json()
    assert body["id"] == 1
    assert body["hero_title"] == "Hi, I build things"
    assert [s["title"] for s in body["services"]] == ["Web", "APIs"]


def test_home_update_replaces_services_only_when_given(admin_client, client):
    admin_client.put("/api/home", json={"hero_title": "v1", "services": [{"title": "Old"}]})
    admin_client.put("/api/home", json={"hero_title": "v2"})

    body = client.get("/api/home").json()
    assert body["hero_title"] == "v2"
    assert [s["title"] for s in body["services"]] == ["Old"]

    admin_client.put("/api/home", json={"hero_title": "v3", "services": []})
    assert client.get("/api/home").json()["services"] == []


def test_about_accepts_comma_separated_skills(admin_client, client):
    assert client.get("/api/about").json() == {}

    admin_client.put("/api/about", json={
        "content": "<p>Me</p>",
        "plaintext": "Me",
        "skills": "Python, SQL, ",
        "experience": [{"company": "Acme", "position": "Dev"}],
    })

    body = client.get("/api/about").json()
    assert body["skills"] == ["Python", "SQL"]
    assert body["experience"] == [{"company": "Acme", "position": "Dev"}]
    assert body["education"] == []


def test_contact_details_upsert(admin_client, client):
    admin_client.put("/api/contact", json={"email": "me@example.test"})
    admin_client.put("/api/contact", json={"email": "new@example.test", "phone": "123"})

    body = client.get("/api/contact").json()
    assert body["id"] == 1
    assert body["email"] == "new@example.test"
    assert body["phone"] == "123"


def test_contact_messages_lifecycle(admin_client, client):
    rv = client.post("/api/contact/messages", json={
        "name": "Visitor",
        "email": "visitor@example.test",
        "message": "Nice site",
    })
    assert rv.status_code == 201

    assert client.get("/api/contact/messages").status_code == 401
    messages = admin_client.get("/api/contact/messages").json()
    assert [m["message"] for m in messages] == ["Nice site"]

    message_id = messages[0]["id"]
    assert admin_client.delete(f"/api/contact/messages/{message_id}").status_code == 200
    assert admin_client.delete(f"/api/contact/messages/{message_id}").status_code == 404


def test_contact_message_with_bad_email_is_400(client):
    rv = client.post("/api/contact/messages", json={
        "name": "Visitor",
        "email": "not-an-email",
        "message": "Hi",
    })
    assert rv.status_code == 400


def test_footer_and_navbar_links(admin_client, client):
    admin_client.put("/api/footer", json={
        "copyright_text": "© Me",
        "navigation_links": [{"title": "Blog", "url": "/blog"}],
        "social_links": [{"platform": "github", "url": "https://github.com/me"}],
    })
    admin_client.put("/api/navbar", json={
        "site_title": "Me",
        "navigation_links": [
            {"title": "Contact", "url": "/contact", "order_index": 2},
            {"title": "Home", "url": "/", "order_index": 0},
        ],
    })

    footer = client.get("/api/footer").json()
    assert footer["copyright_text"] == "© Me"
    assert footer["navigation_links"][0]["url"] == "/blog"
    assert footer["social_links"][0]["platform"] == "github"

    navbar = client.get("/api/navbar").json()
    assert [link["title"] for link in navbar["navigation_links"]] == ["Home", "Contact"]


def test_section_writes_require_admin(client, editor_client):
    assert client.put("/api/about", json={}).status_code == 401
    assert editor_client.put("/api/navbar", json={}).status_code == 403


def test_meta_settings_created_with_defaults(client):
    body = client.get("/api/meta-settings").json()
    assert body["id"] == 1
    assert body["site_title"] == "Portfolio"
    assert body["og_image"] is None


def test_meta_settings_update_replaces_uploaded_images(admin_client):
    first = admin_client.put(
        "/api/meta-settings",
        data={"site_title": "My Site", "site_description": "About me"},
        files={"og_image": ("og.png", BytesIO(b"first"), "image/png")},
    )
    assert first.status_code == 200, first.text
    old_og = first.json()["og_image"]
    assert old_og.startswith(f"{config.UPLOAD_URL_PREFIX}/meta/")
    assert upload_exists(old_og)

    second = admin_client.put(
        "/api/meta-settings",
        data={"site_title": "My Site v2"},
        files={"og_image": ("og2.png", BytesIO(b"second"), "image/png")},
    )
    body = second.json()
    assert body["site_title"] == "My Site v2"
    assert body["og_image"] != old_og
    assert upload_exists(body["og_image"])
    assert not upload_exists(old_og)


def test_meta_settings_rejects_non_image(admin_client):
    rv = admin_client.put(
        "/api/meta-settings",
        data={"site_title": "x"},
        files={"favicon": ("icon.txt", BytesIO(b"text"), "text/plain")},
    )
    assert rv.status_code == 400


def test_meta_settings_rejected_favicon_discards_new_og_image(admin_client, client):
    rv = admin_client.put(
        "/api/meta-settings",
        data={"site_title": "x"},
        files={
            "og_image": ("og.png", BytesIO(b"image"), "image/png"),
            "favicon": ("icon.txt", BytesIO(b"text"), "text/plain"),
        },
    )

    assert rv.status_code == 400
    assert os.listdir(os.path.join(config.UPLOAD_DIR, "meta")) == []
    assert client.get("/api/meta-settings").json()["og_image"] is None
