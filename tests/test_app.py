"""
tests/test_app.py

Application wiring: health check, security headers, error responses.
"""


def test_health(client):
    rv = client.get("/api/health")
    assert rv.status_code == 200
    assert rv.json() == {"status": "ok", "database": "connected"}


def test_api_responses_carry_security_headers(client):
    rv = client.get("/api/health")
    assert rv.headers["x-content-type-options"] == "nosniff"
    assert rv.headers["x-frame-options"] == "DENY"
    assert "default-src 'self'" in rv.headers["content-security-policy"]
    assert "no-store" in rv.headers["cache-control"]
    # HSTS only in production
    assert "strict-transport-security" not in rv.headers


def test_html_shell_is_not_marked_no_store(client):
    rv = client.get("/")
    assert rv.status_code == 200
    assert "no-store" not in rv.headers.get("cache-control", "")


def test_malformed_json_is_400(admin_client):
    rv = admin_client.post(
        "/api/blogs",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert rv.status_code == 400
    assert "detail" in rv.json()
