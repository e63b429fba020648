# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Clears the environment variables the config loader reads so every test
# starts from the documented defaults, and provides shared fixtures.
# =============================================================================

import pytest

from sample_config.settings import get_config

CONFIG_ENV_VARS = (
    "PORT",
    "HOST",
    "NODE_ENV",
    "ENVIRONMENT",
    "ENV",
    "LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
    "CORS_ALLOW_METHODS",
    "CORS_ALLOW_HEADERS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start each test with no config env vars and an empty config cache."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def admin_user_dict():
    """The user every GET /users returns."""
    return {"id": "1", "email": "admin@example.com", "name": "Admin", "role": "admin"}
