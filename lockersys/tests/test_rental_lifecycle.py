from __future__ import annotations

import pytest
from sqlalchemy.exc import SQLAlchemyError
from starlette.testclient import TestClient

from lockersys.core.entities.locker import Locker, LockerStatus
from lockersys.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from lockersys.infrastructure.repositories.rental_repository_impl import RentalRepositoryImpl
from lockersys.tests.helpers import (
    create_client,
    create_locker,
    create_rental,
    locker_status,
    rental_payload,
)


def test_create_then_delete_rental_flips_locker_status(api: TestClient) -> None:
    locker = create_locker(api, number="A-1", monthlyPrice=300)
    client = create_client(api, name="C1")
    assert locker["status"] == "available"

    rental = create_rental(api, locker, client, startDate="2024-01-01", endDate="2024-04-01", totalAmount=1200)

    assert rental["status"] == "active"
    assert rental["paymentStatus"] == "pending"
    assert rental["totalAmount"] == 1200
    assert rental["months"] == 4
    assert rental["locker"]["number"] == "A-1"
    assert rental["locker"]["status"] == "rented"
    assert rental["client"]["name"] == "C1"
    assert locker_status(api, locker["id"]) == "rented"

    r = api.delete(f"/api/rentals/{rental['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Rental deleted successfully", "data": None}

    assert locker_status(api, locker["id"]) == "available"
    assert api.get(f"/api/rentals/{rental['id']}").status_code == 404


@pytest.mark.parametrize("missing_ref", ["lockerId", "clientId"])
def test_invalid_reference_is_rejected_without_writes(api: TestClient, missing_ref: str) -> None:
    locker = create_locker(api)
    client = create_client(api)

    body = rental_payload(locker, client, **{missing_ref: "does-not-exist"})
    r = api.post("/api/rentals", json=body)

    assert r.status_code == 400
    assert r.json()["success"] is False
    assert api.get("/api/rentals").json()["total"] == 0
    assert locker_status(api, locker["id"]) == "available"


def test_missing_required_field_is_a_validation_error(api: TestClient) -> None:
    locker = create_locker(api)
    client = create_client(api)
    body = rental_payload(locker, client)
    del body["totalAmount"]

    r = api.post("/api/rentals", json=body)

    assert r.status_code == 400
    assert "totalAmount" in r.json()["message"]


def test_end_before_start_is_rejected(api: TestClient) -> None:
    locker = create_locker(api)
    client = create_client(api)

    r = api.post("/api/rentals", json=rental_payload(locker, client, startDate="2024-05-01", endDate="2024-04-01"))

    assert r.status_code == 400
    assert locker_status(api, locker["id"]) == "available"


def test_second_active_rental_on_same_locker_conflicts(api: TestClient) -> None:
    locker = create_locker(api)
    first_client = create_client(api)
    second_client = create_client(api)
    create_rental(api, locker, first_client)

    r = api.post("/api/rentals", json=rental_payload(locker, second_client))

    assert r.status_code == 409
    assert r.json()["success"] is False
    assert api.get("/api/rentals", params={"lockerId": locker["id"]}).json()["total"] == 1


def test_locker_in_maintenance_cannot_be_rented(api: TestClient) -> None:
    locker = create_locker(api, status="maintenance")
    client = create_client(api)

    r = api.post("/api/rentals", json=rental_payload(locker, client))

    assert r.status_code == 409
    assert locker_status(api, locker["id"]) == "maintenance"


def test_reserved_locker_can_be_rented(api: TestClient) -> None:
    locker = create_locker(api, status="reserved")
    client = create_client(api)

    create_rental(api, locker, client)

    assert locker_status(api, locker["id"]) == "rented"


def test_student_id_alias_is_accepted(api: TestClient) -> None:
    locker = create_locker(api)
    client = create_client(api)
    body = rental_payload(locker, client)
    body["studentId"] = body.pop("clientId")

    r = api.post("/api/rentals", json=body)

    assert r.status_code == 201, r.text
    assert r.json()["data"]["clientId"] == client["id"]


def test_store_failure_rolls_back_the_whole_rental(api: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    locker = create_locker(api)
    client = create_client(api)

    def _failing_add(self, rental) -> None:
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(RentalRepositoryImpl, "add", _failing_add)

    r = api.post("/api/rentals", json=rental_payload(locker, client))

    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Storage operation failed"}

    monkeypatch.undo()
    # the locker claim made before the failing insert must not survive
    assert locker_status(api, locker["id"]) == "available"
    assert api.get("/api/rentals").json()["total"] == 0


def test_leaving_active_status_releases_the_locker(api: TestClient) -> None:
    locker = create_locker(api)
    client = create_client(api)
    rental = create_rental(api, locker, client)

    r = api.put(f"/api/rentals/{rental['id']}", json={"status": "completed"})

    assert r.status_code == 200, r.text
    assert r.json()["data"]["status"] == "completed"
    assert locker_status(api, locker["id"]) == "available"

    # and re-entering active claims it again
    r = api.put(f"/api/rentals/{rental['id']}", json={"status": "active"})
    assert r.status_code == 200, r.text
    assert locker_status(api, locker["id"]) == "rented"


def test_reactivating_when_locker_was_rented_again_conflicts(api: TestClient) -> None:
    locker = create_locker(api)
    first = create_rental(api, locker, create_client(api))
    api.put(f"/api/rentals/{first['id']}", json={"status": "cancelled"})
    create_rental(api, locker, create_client(api))

    r = api.put(f"/api/rentals/{first['id']}", json={"status": "active"})

    assert r.status_code == 409
    assert api.get(f"/api/rentals/{first['id']}").json()["data"]["status"] == "cancelled"


def test_moving_an_active_rental_moves_the_claim(api: TestClient) -> None:
    old_locker = create_locker(api)
    new_locker = create_locker(api)
    rental = create_rental(api, old_locker, create_client(api))

    r = api.put(f"/api/rentals/{rental['id']}", json={"lockerId": new_locker["id"]})

    assert r.status_code == 200, r.text
    assert r.json()["data"]["locker"]["id"] == new_locker["id"]
    assert locker_status(api, old_locker["id"]) == "available"
    assert locker_status(api, new_locker["id"]) == "rented"


def test_reapplying_an_update_is_idempotent(api: TestClient) -> None:
    locker = create_locker(api)
    rental = create_rental(api, locker, create_client(api))
    payload = {"status": "active", "paymentStatus": "paid", "notes": "paid in cash"}

    first = api.put(f"/api/rentals/{rental['id']}", json=payload)
    second = api.put(f"/api/rentals/{rental['id']}", json=payload)

    assert first.status_code == second.status_code == 200
    for key in ("status", "paymentStatus", "notes", "totalAmount", "lockerId", "clientId"):
        assert first.json()["data"][key] == second.json()["data"][key]
    assert locker_status(api, locker["id"]) == "rented"


def test_update_validates_the_merged_period(api: TestClient) -> None:
    rental = create_rental(api, create_locker(api), create_client(api))

    r = api.put(f"/api/rentals/{rental['id']}", json={"endDate": "2023-12-01"})

    assert r.status_code == 400
    assert api.get(f"/api/rentals/{rental['id']}").json()["data"]["endDate"] == "2024-04-01"


def test_update_unknown_rental_is_not_found(api: TestClient) -> None:
    r = api.put("/api/rentals/missing", json={"notes": "x"})
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Rental not found"}


def test_deleting_completed_rental_leaves_other_active_claim(api: TestClient) -> None:
    locker = create_locker(api)
    old = create_rental(api, locker, create_client(api))
    api.put(f"/api/rentals/{old['id']}", json={"status": "completed"})
    create_rental(api, locker, create_client(api))

    r = api.delete(f"/api/rentals/{old['id']}")

    assert r.status_code == 200
    assert locker_status(api, locker["id"]) == "rented"


def test_list_rentals_filters_and_searches(api: TestClient) -> None:
    ana = create_client(api, name="Ana Souza")
    bruno = create_client(api, name="Bruno Lima")
    create_rental(api, create_locker(api, number="X-10"), ana, notes="semester one")
    done = create_rental(api, create_locker(api, number="Y-20"), bruno)
    api.put(f"/api/rentals/{done['id']}", json={"status": "completed"})

    by_status = api.get("/api/rentals", params={"status": "completed"}).json()
    assert [r["id"] for r in by_status["data"]] == [done["id"]]

    by_client = api.get("/api/rentals", params={"clientId": ana["id"]}).json()
    assert by_client["total"] == 1
    assert by_client["data"][0]["client"]["name"] == "Ana Souza"

    assert api.get("/api/rentals", params={"search": "bruno"}).json()["total"] == 1
    assert api.get("/api/rentals", params={"search": "x-1"}).json()["total"] == 1
    assert api.get("/api/rentals", params={"search": "SEMESTER"}).json()["total"] == 1


def test_delete_unknown_rental_is_not_found(api: TestClient) -> None:
    r = api.delete("/api/rentals/missing")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Rental not found"}


def test_store_failure_on_delete_keeps_the_rental(api: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    locker = create_locker(api)
    rental = create_rental(api, locker, create_client(api))

    def _failing_update(self, locker) -> None:
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(LockerRepositoryImpl, "update", _failing_update)

    r = api.delete(f"/api/rentals/{rental['id']}")

    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Storage operation failed"}

    monkeypatch.undo()
    assert api.get(f"/api/rentals/{rental['id']}").status_code == 200
    assert locker_status(api, locker["id"]) == "rented"


def test_unique_index_rejects_a_racing_second_rental(api: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    locker = create_locker(api)
    create_rental(api, locker, create_client(api))
    second_client = create_client(api)

    # a concurrent request that read the locker before the first rental committed
    def _no_active_rental(self, locker_id, *, exclude_id=None):
        return None

    def _force_rented(self) -> None:
        self.status = LockerStatus.RENTED

    monkeypatch.setattr(RentalRepositoryImpl, "find_active_for_locker", _no_active_rental)
    monkeypatch.setattr(Locker, "mark_rented", _force_rented)

    r = api.post("/api/rentals", json=rental_payload(locker, second_client))

    assert r.status_code == 409
    assert r.json()["success"] is False

    monkeypatch.undo()
    assert api.get("/api/rentals", params={"lockerId": locker["id"]}).json()["total"] == 1
    assert locker_status(api, locker["id"]) == "rented"
