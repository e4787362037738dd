"""Fixtures for tests that run against the real JSON store and HTTP app."""

import pytest
from fastapi.testclient import TestClient

from marketplace.application.auth import RegisterUserHandler
from marketplace.infrastructure.bootstrap import build_container
from marketplace.infrastructure.config import Settings
from marketplace.infrastructure.http.app import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", jwt_secret="test-secret", webhook_secret="hook")


@pytest.fixture
def container(settings):
    return build_container(settings)


@pytest.fixture
def client(settings, container):
    with TestClient(create_app(settings, container)) as test_client:
        yield test_client


def _register(client, username, role=None):
    body = {"username": username, "email": f"{username}@example.com", "password": "secret1"}
    if role:
        body["role"] = role
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def customer(client):
    return _register(client, "carol")


@pytest.fixture
def vendor(client):
    return _register(client, "vince", role="vendor")


@pytest.fixture
def admin(client, container):
    RegisterUserHandler(container.users, container.hasher).handle(
        "root", "root@example.com", "secret1", role="admin", allow_admin=True
    )
    response = client.post("/api/auth/login", json={"email": "root@example.com", "password": "secret1"})
    return {"Authorization": f"Bearer {response.json()['token']}"}
