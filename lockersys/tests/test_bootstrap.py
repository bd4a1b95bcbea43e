from __future__ import annotations

from sqlalchemy import text
from starlette.testclient import TestClient

from lockersys.infrastructure.bootstrap import initialize_database, load_seed_file
from lockersys.infrastructure.config import Settings
from lockersys.infrastructure.database import Database
from lockersys.main import create_app
from lockersys.tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD


def _seeded_settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+pysqlite:///:memory:",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        seed_sample_data=True,
    )


def test_seed_file_is_valid_yaml() -> None:
    doc = load_seed_file(Settings(_env_file=None).seed_data_path)

    assert {"clients", "lockers", "locations"} <= set(doc)
    assert all(locker.get("status", "available") != "rented" for locker in doc["lockers"])


def test_startup_seeds_sample_data() -> None:
    with TestClient(create_app(_seeded_settings())) as client:
        token = client.post(
            "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        ).json()["data"]["token"]
        headers = {"Authorization": f"Bearer {token}"}

        stats = client.get("/api/dashboard/stats", headers=headers).json()["data"]
        assert stats["totalLockers"] == 5
        assert stats["availableLockers"] == 5
        assert stats["totalClients"] == 3
        assert client.get("/api/locations", headers=headers).json()["total"] == 2


def test_initialization_is_idempotent() -> None:
    settings = _seeded_settings()
    database = Database.from_settings(settings)
    try:
        initialize_database(database, settings)
        initialize_database(database, settings)

        with database.engine.connect() as connection:
            assert connection.execute(text("SELECT COUNT(*) FROM users")).scalar_one() == 1
            assert connection.execute(text("SELECT COUNT(*) FROM lockers")).scalar_one() == 5
    finally:
        database.dispose()
