from __future__ import annotations

from itertools import count
from typing import Any

from starlette.testclient import TestClient

ADMIN_EMAIL = "admin@lockers.com"
ADMIN_PASSWORD = "admin123"

_seq = count(1)


def create_locker(api: TestClient, **overrides: Any) -> dict[str, Any]:
    n = next(_seq)
    body = {
        "number": f"L{n:03d}",
        "location": "Building A - Floor 1",
        "size": "medium",
        "monthlyPrice": 300,
    }
    body.update(overrides)
    r = api.post("/api/lockers", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def create_client(api: TestClient, **overrides: Any) -> dict[str, Any]:
    n = next(_seq)
    body = {
        "name": f"Client {n}",
        "email": f"client{n}@example.com",
        "document": f"{n:011d}",
        "phone": "(11) 99999-0000",
    }
    body.update(overrides)
    r = api.post("/api/clients", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def rental_payload(locker: dict[str, Any], client: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    body = {
        "lockerId": locker["id"],
        "clientId": client["id"],
        "startDate": "2024-01-01",
        "endDate": "2024-04-01",
        "monthlyPrice": 300,
        "totalAmount": 1200,
    }
    body.update(overrides)
    return body


def create_rental(api: TestClient, locker: dict[str, Any], client: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    r = api.post("/api/rentals", json=rental_payload(locker, client, **overrides))
    assert r.status_code == 201, r.text
    return r.json()["data"]


def locker_status(api: TestClient, locker_id: str) -> str:
    r = api.get(f"/api/lockers/{locker_id}")
    assert r.status_code == 200, r.text
    return r.json()["data"]["status"]
