"""
Pytest configuration and fixtures for BoiBritto tests.
"""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["LOG_LEVEL"] = "WARNING"

from boibritto.auth import FirebaseAuthError, get_firebase_auth  # noqa: E402
from boibritto.providers import storage_provider  # noqa: E402


class FakeFirebaseAuth:
    """Accepts bearer tokens of the form ``token-<name>``."""

    def verify_token(self, id_token: str) -> dict:
        if not id_token.startswith("token-"):
            raise FirebaseAuthError("Invalid token")
        name = id_token.removeprefix("token-")
        return {
            "uid": f"uid-{name}",
            "email": f"{name}@example.com",
            "name": name.title(),
            "picture": f"https://example.com/{name}.png",
        }


@pytest.fixture
def storage():
    """SQLiteStorage on a temporary database, installed as the app's provider."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    storage = storage_provider.SQLiteStorage(db_path)
    storage_provider._storage_provider_instance = storage

    yield storage

    storage_provider._storage_provider_instance = None
    if os.path.exists(db_path):
        os.remove(db_path)


@pytest.fixture
def make_user(storage):
    """Create a registered user whose token is ``token-<name>``."""

    def _make(name: str) -> dict:
        return storage.create_user(
            {
                "uid": f"uid-{name}",
                "email": f"{name}@example.com",
                "username": name,
                "display_name": name.title(),
            }
        )

    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def client(storage):
    """Test client with Firebase verification replaced by FakeFirebaseAuth."""
    from boibritto.main import app

    app.dependency_overrides[get_firebase_auth] = FakeFirebaseAuth
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def headers(name: str) -> dict:
    return {"Authorization": f"Bearer token-{name}"}


@pytest.fixture
def auth_headers():
    """Authorization headers for a named test user."""
    return headers
