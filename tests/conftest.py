"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/                  # loginapp_auth and loginapp_config
    ├── loginapp_identity/     # Identity domain tests (users, reset tokens)
    │   ├── unit/              # Fast, isolated tests with mocks
    │   └── integration/       # SQLite-backed repository and flow tests
    ├── integration/api/       # HTTP endpoints through TestClient
    └── shared/                # Shared test doubles

Integration tests use a throwaway SQLite file under ``tmp_path``; nothing
outside the test run is touched.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from loginapp_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.test if present (e.g. to raise log verbosity locally)
if (PROJECT_ROOT / "config" / ".env.test").exists():
    load_dotenv(PROJECT_ROOT / "config" / ".env.test")

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only-0123456789"


@pytest.fixture(autouse=True)
def _isolate_settings_cache():
    """Never leak cached settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET
