"""Tests for user endpoints."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app

from tests.conftest import make_user


@pytest.fixture
def client(auth_backend) -> TestClient:
    return TestClient(create_app())


class TestCurrentUser:
    def test_requires_session(self, client):
        response = client.get("/api/users/me")
        assert response.status_code == 401

    def test_returns_identity(self, client, signed_in, test_user):
        response = client.get("/api/users/me")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_user.id
        assert data["email"] == test_user.email
        assert data["role"] == "client"
        assert data["invited"] is False

    def test_invited_admin(self, client, auth_backend):
        auth_backend.current_user = make_user(role="admin", invited=True)

        data = client.get("/api/users/me").json()

        assert data["role"] == "admin"
        assert data["invited"] is True
