from __future__ import annotations

from starlette.testclient import TestClient


def _create(api: TestClient, name: str, description: str | None = None) -> dict:
    r = api.post("/api/locations", json={"name": name, "description": description})
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_list_and_search_locations(api: TestClient) -> None:
    _create(api, "Bloco B - 2º Andar", "Ao lado da biblioteca")
    _create(api, "Bloco A - 1º Andar")

    listed = api.get("/api/locations").json()
    assert listed["total"] == 2
    # ordered by name
    assert [loc["name"] for loc in listed["data"]] == ["Bloco A - 1º Andar", "Bloco B - 2º Andar"]

    assert api.get("/api/locations", params={"search": "biblioteca"}).json()["total"] == 1


def test_location_names_are_unique_ignoring_case(api: TestClient) -> None:
    _create(api, "Main Hall")

    r = api.post("/api/locations", json={"name": "main hall"})

    assert r.status_code == 409


def test_update_and_delete_location(api: TestClient) -> None:
    location = _create(api, "Gym")

    r = api.put(f"/api/locations/{location['id']}", json={"description": "Basement"})
    assert r.status_code == 200
    assert r.json()["data"]["description"] == "Basement"
    assert r.json()["data"]["name"] == "Gym"

    assert api.delete(f"/api/locations/{location['id']}").status_code == 200
    assert api.get(f"/api/locations/{location['id']}").status_code == 404


def test_blank_location_name_is_rejected(api: TestClient) -> None:
    r = api.post("/api/locations", json={"name": " "})
    assert r.status_code == 400
