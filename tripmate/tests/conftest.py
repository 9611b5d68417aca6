"""
Shared fixtures: in-memory SQLite database and authenticated test users.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import tripmate.models  # noqa: F401
from tripmate.db.base import Base
from tripmate.db.session import get_db
from tripmate.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Sign up and log in a user; returns {"id", "username", "headers"}."""
    def _register(username: str) -> dict:
        client.post(
            "/api/auth/signup",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": "testpassword123"
            }
        )
        response = client.post(
            "/api/auth/login",
            json={"username": username, "password": "testpassword123"}
        )
        headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
        me = client.get("/api/users/me", headers=headers).json()
        return {"id": me["id"], "username": username, "headers": headers}
    return _register


@pytest.fixture
def make_trip(client):
    """Create a trip owned by ``owner``; returns the response JSON."""
    def _make_trip(owner: dict, **overrides) -> dict:
        payload = {
            "trip_name": "Hokkaido snow week",
            "start_date": "2030-01-10",
            "end_date": "2030-01-16",
        }
        payload.update(overrides)
        response = client.post("/api/trips", json=payload, headers=owner["headers"])
        assert response.status_code == 201, response.text
        return response.json()
    return _make_trip


@pytest.fixture
def join(client):
    def _join(user: dict, trip_id: int):
        response = client.post(f"/api/trips/{trip_id}/join", headers=user["headers"])
        assert response.status_code == 200, response.text
        return response.json()
    return _join
