"""Pytest configuration and shared fixtures for petstore-client tests."""

import pytest

from petstore_client import Configuration, reset_default_configuration
from petstore_client.auth import CredentialResolver


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear credential environment variables before each test.

    This prevents a developer's real credentials from leaking into tests.
    """
    import os

    test_prefixes = ("TEST_", "PETSTORE_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture(autouse=True)
def isolated_default_configuration():
    """Reset the process-wide default configuration around each test."""
    reset_default_configuration()
    yield
    reset_default_configuration()


@pytest.fixture
def no_dotenv_resolver():
    """Credential resolver that only reads the process environment."""
    return CredentialResolver(load_dotenv=False)


@pytest.fixture
def no_auth_config():
    """Configuration without credentials or retries."""
    return Configuration(auth_strategy="none", retry_enabled=False)
