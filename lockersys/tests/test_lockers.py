from __future__ import annotations

import math

from starlette.testclient import TestClient

from lockersys.tests.helpers import create_client, create_locker, create_rental, locker_status


def test_create_and_get_locker(api: TestClient) -> None:
    r = api.post(
        "/api/lockers",
        json={"number": "B001", "location": "Building B - Floor 1", "size": "large", "monthlyPrice": "80.50"},
    )

    assert r.status_code == 201, r.text
    body = r.json()
    assert body["success"] is True
    locker = body["data"]
    assert locker["status"] == "available"
    assert locker["monthlyPrice"] == 80.5
    assert locker["createdAt"] is not None

    fetched = api.get(f"/api/lockers/{locker['id']}").json()["data"]
    assert {k: fetched[k] for k in ("id", "number", "size", "status", "monthlyPrice")} == {
        k: locker[k] for k in ("id", "number", "size", "status", "monthlyPrice")
    }


def test_snake_case_input_is_accepted(api: TestClient) -> None:
    r = api.post(
        "/api/lockers",
        json={"number": "S1", "location": "Hall", "size": "small", "monthly_price": 50},
    )
    assert r.status_code == 201, r.text
    assert r.json()["data"]["monthlyPrice"] == 50


def test_duplicate_number_conflicts(api: TestClient) -> None:
    create_locker(api, number="A001")

    r = api.post("/api/lockers", json={"number": "A001", "location": "x", "size": "small", "monthlyPrice": 10})

    assert r.status_code == 409
    assert r.json()["success"] is False


def test_locker_cannot_be_created_as_rented(api: TestClient) -> None:
    r = api.post(
        "/api/lockers",
        json={"number": "R1", "location": "x", "size": "small", "monthlyPrice": 10, "status": "rented"},
    )
    assert r.status_code == 409


def test_invalid_size_is_a_validation_error(api: TestClient) -> None:
    r = api.post("/api/lockers", json={"number": "Z1", "location": "x", "size": "huge", "monthlyPrice": 10})
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_pagination_reports_total_pages(api: TestClient) -> None:
    for i in range(7):
        create_locker(api, number=f"P{i:02d}")

    r = api.get("/api/lockers", params={"page": 2, "limit": 3})

    body = r.json()
    assert r.status_code == 200
    assert body["total"] == 7
    assert body["page"] == 2
    assert body["limit"] == 3
    assert body["totalPages"] == math.ceil(7 / 3)
    assert [locker["number"] for locker in body["data"]] == ["P03", "P04", "P05"]


def test_non_positive_paging_is_coerced(api: TestClient) -> None:
    create_locker(api)

    defaults = api.get("/api/lockers", params={"page": 0, "limit": 0}).json()
    assert defaults["page"] == 1
    assert defaults["limit"] == 10

    negative = api.get("/api/lockers", params={"page": -3, "limit": -5}).json()
    assert negative["page"] == 1
    assert negative["limit"] == 1
    assert len(negative["data"]) <= negative["limit"]


def test_list_filters_by_status_size_and_search(api: TestClient) -> None:
    create_locker(api, number="A001", location="Building A", size="small")
    create_locker(api, number="A002", location="Building A", size="large", status="maintenance")
    create_locker(api, number="B001", location="Building B", size="small")

    assert api.get("/api/lockers", params={"status": "maintenance"}).json()["total"] == 1
    assert api.get("/api/lockers", params={"size": "small"}).json()["total"] == 2
    assert api.get("/api/lockers", params={"search": "building b"}).json()["total"] == 1
    assert api.get("/api/lockers", params={"search": "A00"}).json()["total"] == 2


def test_available_and_stats(api: TestClient) -> None:
    first = create_locker(api, number="A001")
    create_locker(api, number="A002", status="maintenance")
    create_locker(api, number="A003", status="reserved")
    create_rental(api, first, create_client(api))

    available = api.get("/api/lockers/available").json()["data"]
    assert available == []

    stats = api.get("/api/lockers/stats").json()["data"]
    assert stats == {"total": 3, "available": 0, "rented": 1, "maintenance": 1, "reserved": 1}


def test_update_locker_fields(api: TestClient) -> None:
    locker = create_locker(api)

    r = api.put(f"/api/lockers/{locker['id']}", json={"location": "Library", "monthlyPrice": 120})

    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["location"] == "Library"
    assert updated["monthlyPrice"] == 120
    assert updated["number"] == locker["number"]


def test_status_edit_cannot_break_the_rental_invariant(api: TestClient) -> None:
    rented = create_locker(api)
    create_rental(api, rented, create_client(api))
    idle = create_locker(api)

    assert api.put(f"/api/lockers/{rented['id']}", json={"status": "available"}).status_code == 409
    assert api.put(f"/api/lockers/{idle['id']}", json={"status": "rented"}).status_code == 409
    assert api.put(f"/api/lockers/{idle['id']}", json={"status": "maintenance"}).status_code == 200

    assert locker_status(api, rented["id"]) == "rented"
    assert locker_status(api, idle["id"]) == "maintenance"



def test_null_status_is_rejected(api: TestClient) -> None:
    locker = create_locker(api)

    r = api.put(f"/api/lockers/{locker['id']}", json={"status": None})

    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "status is required"}
    assert locker_status(api, locker["id"]) == "available"


def test_search_treats_wildcards_literally(api: TestClient) -> None:
    create_locker(api, number="A_1")
    create_locker(api, number="AB1")
    create_locker(api, number="C%2")

    underscore = api.get("/api/lockers", params={"search": "a_1"}).json()
    assert [item["number"] for item in underscore["data"]] == ["A_1"]
    percent = api.get("/api/lockers", params={"search": "%"}).json()
    assert [item["number"] for item in percent["data"]] == ["C%2"]


def test_delete_locker(api: TestClient) -> None:
    locker = create_locker(api)

    r = api.delete(f"/api/lockers/{locker['id']}")

    assert r.status_code == 200
    assert api.get(f"/api/lockers/{locker['id']}").status_code == 404


def test_locker_referenced_by_a_rental_cannot_be_deleted(api: TestClient) -> None:
    locker = create_locker(api)
    create_rental(api, locker, create_client(api))

    r = api.delete(f"/api/lockers/{locker['id']}")

    assert r.status_code == 409
    assert api.get(f"/api/lockers/{locker['id']}").status_code == 200


def test_unknown_locker_is_not_found(api: TestClient) -> None:
    assert api.get("/api/lockers/nope").json() == {"success": False, "message": "Locker not found"}
    assert api.delete("/api/lockers/nope").status_code == 404
