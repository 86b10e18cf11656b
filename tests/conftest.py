"""Pytest configuration and shared fixtures.

Every test gets its own application built by create_app() on a private
in-memory SQLite database, so nothing leaks between tests.
"""
from typing import Any, Callable, Dict, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from stable_admin.config import Settings
from stable_admin.database import Database
from stable_admin.main import create_app

ADMIN_PASSWORD = "test-admin-password"


# =============================================================================
# Settings and database
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SECRET_KEY="test-secret-key-for-testing-only",
        RATE_LIMIT_ENABLED=False,
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings: Settings) -> Iterator[Database]:
    """A standalone database client with all tables created."""
    database = Database(settings)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db_session(database: Database):
    session = database.session()
    yield session
    session.close()


# =============================================================================
# HTTP clients
# =============================================================================


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Unauthenticated client. Entering the context runs the lifespan (create_all)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    """Client holding a valid admin session cookie."""
    response = client.post("/auth/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


# =============================================================================
# Factories
# =============================================================================


def setup_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "Willow Creek Stables",
        "type": "stable",
        "description": "Boarding and lessons",
        "owner_email": "owner@willowcreek.example",
        "owner_name": "Jane Rider",
        "owner_password": "securepassword123",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def provision(admin_client: TestClient) -> Callable[..., Dict[str, Any]]:
    """Run the organization setup workflow and return the response body."""

    def _provision(**overrides: Any) -> Dict[str, Any]:
        response = admin_client.post("/organizations/setup", json=setup_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _provision


@pytest.fixture
def create_user(admin_client: TestClient) -> Callable[..., Dict[str, Any]]:
    def _create_user(email: str = "rider@example.com", password: str = "password123", **fields: Any):
        response = admin_client.post("/users", json={"email": email, "password": password, **fields})
        assert response.status_code == 201, response.text
        return response.json()["user"]

    return _create_user
