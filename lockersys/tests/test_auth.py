from __future__ import annotations

from starlette.testclient import TestClient

from lockersys.tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD


def test_login_returns_user_and_token(client: TestClient) -> None:
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD})

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["user"]["email"] == ADMIN_EMAIL
    assert data["user"]["role"] == "admin"
    assert "passwordHash" not in data["user"]
    assert len(data["token"]) == 64
    assert data["expiresAt"]


def test_bad_credentials_are_unauthorized(client: TestClient) -> None:
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Invalid credentials"}

    r = client.post("/api/auth/login", json={"email": "nobody@lockers.com", "password": ADMIN_PASSWORD})
    assert r.status_code == 401


def test_missing_credentials_are_a_validation_error(client: TestClient) -> None:
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})
    assert r.status_code == 400


def test_protected_routes_reject_missing_or_bad_tokens(client: TestClient) -> None:
    assert client.get("/api/lockers").status_code == 401
    r = client.get("/api/lockers", headers={"Authorization": "Bearer not-a-real-token"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_health_is_public(client: TestClient) -> None:
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["database"] == "ok"


def test_me_returns_the_current_user(api: TestClient) -> None:
    r = api.get("/api/auth/me")
    assert r.status_code == 200
    assert r.json()["data"]["email"] == ADMIN_EMAIL


def test_register_requires_an_authenticated_admin(client: TestClient) -> None:
    r = client.post("/api/auth/register", json={"name": "Op", "email": "op@lockers.com", "password": "secret"})
    assert r.status_code == 401


def test_register_creates_a_user_who_can_log_in(api: TestClient) -> None:
    r = api.post("/api/auth/register", json={"name": "Operator", "email": "Op@Lockers.com", "password": "secret1"})

    assert r.status_code == 201, r.text
    assert r.json()["data"]["user"]["email"] == "op@lockers.com"

    login = api.post("/api/auth/login", json={"email": "op@lockers.com", "password": "secret1"})
    assert login.status_code == 200


def test_register_duplicate_email_conflicts(api: TestClient) -> None:
    r = api.post("/api/auth/register", json={"name": "Dup", "email": ADMIN_EMAIL, "password": "x"})
    assert r.status_code == 409


def test_logout_revokes_the_token(client: TestClient, auth_headers: dict[str, str]) -> None:
    assert client.get("/api/auth/me", headers=auth_headers).status_code == 200

    r = client.post("/api/auth/logout", headers=auth_headers)
    assert r.status_code == 200

    assert client.get("/api/auth/me", headers=auth_headers).status_code == 401
