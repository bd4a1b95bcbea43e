from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from lockersys.infrastructure.config import Settings
from lockersys.main import create_app
from lockersys.tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture()
def settings() -> Settings:
    """
    Fresh in-memory SQLite database per test; `.env` files are ignored so
    local configuration never leaks into the suite.
    """
    return Settings(
        _env_file=None,
        database_url="sqlite+pysqlite:///:memory:",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        seed_sample_data=False,
    )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # entering the context runs the lifespan, which creates the schema and the admin user
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client: TestClient) -> dict[str, str]:
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['data']['token']}"}


@pytest.fixture()
def api(client: TestClient, auth_headers: dict[str, str]) -> TestClient:
    """The test client, logged in as the default admin."""
    client.headers.update(auth_headers)
    return client
