from __future__ import annotations

from starlette.testclient import TestClient

from lockersys.tests.helpers import create_client, create_locker, create_rental


def _payment(rental_id: str, **overrides) -> dict:
    body = {"rentalId": rental_id, "amount": 300, "paymentDate": "2024-01-05", "method": "pix"}
    body.update(overrides)
    return body


def test_record_and_list_payments_for_a_rental(api: TestClient) -> None:
    rental = create_rental(api, create_locker(api), create_client(api))
    other = create_rental(api, create_locker(api), create_client(api))

    first = api.post("/api/payments", json=_payment(rental["id"], paymentDate="2024-01-05"))
    second = api.post("/api/payments", json=_payment(rental["id"], paymentDate="2024-02-05", status="completed"))
    api.post("/api/payments", json=_payment(other["id"]))

    assert first.status_code == 201, first.text
    assert first.json()["data"]["status"] == "pending"
    assert second.json()["data"]["status"] == "completed"

    listed = api.get("/api/payments", params={"rentalId": rental["id"]}).json()
    assert listed["total"] == 2
    # newest payment date first
    assert [p["paymentDate"] for p in listed["data"]] == ["2024-02-05", "2024-01-05"]

    nested = api.get(f"/api/rentals/{rental['id']}/payments").json()
    assert nested["total"] == 2

    assert api.get("/api/payments").json()["total"] == 3


def test_payment_requires_an_existing_rental(api: TestClient) -> None:
    r = api.post("/api/payments", json=_payment("missing"))
    assert r.status_code == 400
    assert api.get("/api/rentals/missing/payments").status_code == 404


def test_payment_amount_must_be_positive(api: TestClient) -> None:
    rental = create_rental(api, create_locker(api), create_client(api))
    assert api.post("/api/payments", json=_payment(rental["id"], amount=0)).status_code == 400


def test_invalid_method_is_rejected(api: TestClient) -> None:
    rental = create_rental(api, create_locker(api), create_client(api))
    assert api.post("/api/payments", json=_payment(rental["id"], method="cheque")).status_code == 400


def test_update_and_delete_payment(api: TestClient) -> None:
    rental = create_rental(api, create_locker(api), create_client(api))
    payment = api.post("/api/payments", json=_payment(rental["id"])).json()["data"]

    r = api.put(f"/api/payments/{payment['id']}", json={"status": "completed", "amount": "299.90"})
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "completed"
    assert r.json()["data"]["amount"] == 299.9

    assert api.delete(f"/api/payments/{payment['id']}").status_code == 200
    assert api.get(f"/api/payments/{payment['id']}").status_code == 404


def test_deleting_a_rental_removes_its_payments(api: TestClient) -> None:
    rental = create_rental(api, create_locker(api), create_client(api))
    api.post("/api/payments", json=_payment(rental["id"]))

    assert api.delete(f"/api/rentals/{rental['id']}").status_code == 200
    assert api.get("/api/payments").json()["total"] == 0
