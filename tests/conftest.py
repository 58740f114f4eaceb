"""Shared fixtures for the API tests.

Every test gets a fresh application, and with it an empty in‑memory
store.
"""

import pytest
from fastapi.testclient import TestClient

from skill_exchange_api.app.main import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_user(client):
    """Factory that signs up a user and returns the created profile."""

    def _make_user(username="alice", **overrides):
        payload = {
            "username": username,
            "email": f"{username}@example.com",
            "password": "secret123",
            "full_name": username.capitalize() + " Tester",
        }
        payload.update(overrides)
        response = client.post("/api/auth/signup", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user


@pytest.fixture
def make_skill(client):
    def _make_skill(user_id, title="Guitar", **overrides):
        payload = {"user_id": user_id, "title": title, "category": "Music"}
        payload.update(overrides)
        response = client.post("/api/skills", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_skill


def auth_header(client, username, password="secret123"):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
