"""Pytest fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from loginapp.presentation.api.app import API_PREFIX, create_app
from loginapp.presentation.api.dependencies import get_notifier
from loginapp_config.settings import Settings
from tests.shared.doubles import RecordingNotifier

TEST_PASSWORD = "Secret123"


@pytest.fixture
def auth_prefix() -> str:
    return f"{API_PREFIX}/auth"


@pytest.fixture
def api_settings(tmp_path, jwt_secret) -> Settings:
    """Test settings backed by a throwaway SQLite file."""
    return Settings(
        jwt_secret_key=SecretStr(jwt_secret),
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        debug=True,
        api_cors_origins="http://localhost:5173",
        bcrypt_rounds=4,
        frontend_base_url="http://localhost:5173",
        smtp_enabled=False,
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def test_client(api_settings, notifier):
    """A client whose lifespan has created the schema."""
    app = create_app(settings=api_settings)
    app.dependency_overrides[get_notifier] = lambda: notifier

    with TestClient(app) as client:
        yield client


@pytest.fixture
def registration_data() -> dict:
    return {
        "email": "alice@example.com",
        "name": "Alice",
        "phone": "+1 555 0100",
        "password": TEST_PASSWORD,
        "confirmPassword": TEST_PASSWORD,
    }


@pytest.fixture
def auth_headers(test_client, registration_data, auth_prefix) -> dict:
    """Register a user and return bearer headers for them."""
    response = test_client.post(f"{auth_prefix}/register", json=registration_data)
    assert response.status_code == 201

    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
