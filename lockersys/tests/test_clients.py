from __future__ import annotations

from starlette.testclient import TestClient

from lockersys.tests.helpers import create_client, create_locker, create_rental


def test_create_client_normalizes_email(api: TestClient) -> None:
    r = api.post(
        "/api/clients",
        json={"name": "João Silva", "email": "Joao@Email.com", "document": "12345678901", "phone": "(11) 99999-9999"},
    )

    assert r.status_code == 201, r.text
    client = r.json()["data"]
    assert client["email"] == "joao@email.com"
    assert client["status"] == "active"
    assert client["address"] is None


def test_duplicate_email_or_document_conflicts(api: TestClient) -> None:
    create_client(api, email="maria@email.com", document="98765432100")

    same_email = api.post("/api/clients", json={"name": "M", "email": "MARIA@email.com", "document": "1"})
    same_document = api.post("/api/clients", json={"name": "M", "email": "other@email.com", "document": "98765432100"})

    assert same_email.status_code == 409
    assert same_document.status_code == 409


def test_missing_name_is_rejected(api: TestClient) -> None:
    r = api.post("/api/clients", json={"name": "  ", "email": "a@b.com", "document": "1"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "name is required"}


def test_list_clients_paginates_and_searches(api: TestClient) -> None:
    for i in range(5):
        create_client(api, name=f"Person {i}", email=f"person{i}@example.com")
    create_client(api, name="Pedro Oliveira", email="pedro@email.com", status="inactive")

    first_page = api.get("/api/clients", params={"limit": 4}).json()
    assert first_page["total"] == 6
    assert first_page["totalPages"] == 2
    assert len(first_page["data"]) == 4

    assert api.get("/api/clients", params={"search": "pedro"}).json()["total"] == 1
    assert api.get("/api/clients", params={"status": "inactive"}).json()["total"] == 1


def test_students_alias_serves_the_same_registry(api: TestClient) -> None:
    client = create_client(api)

    r = api.get(f"/api/students/{client['id']}")

    assert r.status_code == 200
    assert r.json()["data"]["id"] == client["id"]


def test_update_client(api: TestClient) -> None:
    client = create_client(api)

    r = api.put(f"/api/clients/{client['id']}", json={"address": "Rua A, 10", "status": "inactive"})

    assert r.status_code == 200
    assert r.json()["data"]["address"] == "Rua A, 10"
    assert r.json()["data"]["status"] == "inactive"


def test_update_into_duplicate_email_conflicts(api: TestClient) -> None:
    create_client(api, email="taken@example.com")
    client = create_client(api)

    r = api.put(f"/api/clients/{client['id']}", json={"email": "taken@example.com"})

    assert r.status_code == 409


def test_client_with_rentals_cannot_be_deleted(api: TestClient) -> None:
    client = create_client(api)
    create_rental(api, create_locker(api), client)

    assert api.delete(f"/api/clients/{client['id']}").status_code == 409


def test_delete_client(api: TestClient) -> None:
    client = create_client(api)

    assert api.delete(f"/api/clients/{client['id']}").status_code == 200
    assert api.get(f"/api/clients/{client['id']}").status_code == 404
