"""
Shared fixtures: an in-memory MongoDB (mongomock) wired into the app
through the `get_stores` dependency.
"""
import mongomock
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.api.deps import get_stores
from app.core.auth import create_access_token
from app.services.mongo_service import StoreRegistry

JOB_PAYLOAD = {
    "description": "Backend dev",
    "requirements": "3y exp",
    "validation": True,
    "application_questions": "Why us?",
    "deadline": "2025-01-01",
}


@pytest.fixture
def db():
    return mongomock.MongoClient()["recruiting_test"]


@pytest.fixture
def stores(db):
    return StoreRegistry(db)


@pytest.fixture
def client(stores):
    app.dependency_overrides[get_stores] = lambda: stores
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def make(uid: str = "user-1") -> dict:
        token = create_access_token({"sub": uid})
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def company(client, auth_headers):
    """Company "Acme" with logo "acme.png", owned by user owner-1."""
    response = client.post(
        "/api/companies",
        json={"name": "Acme", "email": "jobs@acme.io", "logo": "acme.png"},
        headers=auth_headers("owner-1"),
    )
    assert response.status_code == 201
    return response.json()
