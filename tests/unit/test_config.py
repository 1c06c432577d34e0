"""Tests for configuration and credential strategy selection."""

import threading
import time

import pytest

import petstore_client
from petstore_client.auth import ApiKeyStrategy, CompositeStrategy, NoAuth, OAuth2Strategy
from petstore_client.auth.oauth2 import DEFAULT_TOKEN_URL
from petstore_client.config import (
    DEFAULT_BASE_URL,
    FROM_ENV,
    Configuration,
    configure,
    default_configuration,
    reset_default_configuration,
)
from petstore_client.errors import ConfigurationError, ValidationError

OAUTH2_CREDENTIALS = {"oauth2_client_id": "my-app", "oauth2_client_secret": "secret123"}


class TestDefaults:
    """A bare Configuration points at the public Petstore."""

    @pytest.mark.unit
    def test_default_values(self):
        config = Configuration()

        assert config.base_url == DEFAULT_BASE_URL == "https://petstore.swagger.io/v2"
        assert config.timeout == 30
        assert config.open_timeout == 10
        assert config.retry_enabled is True
        assert config.max_retries == 2
        assert config.auth_strategy == "api_key"
        assert config.api_key is None
        assert config.oauth2_token_url is None

    @pytest.mark.unit
    def test_unknown_option_rejected(self):
        with pytest.raises(TypeError, match="Unexpected configuration options: api_secret"):
            Configuration(api_secret="x")


class TestAuthenticatorSelection:
    """auth_strategy chooses which strategy is built."""

    @pytest.mark.unit
    def test_none(self):
        config = Configuration(auth_strategy="none", api_key="special-key", **OAUTH2_CREDENTIALS)
        assert isinstance(config.authenticator, NoAuth)

    @pytest.mark.unit
    def test_api_key(self):
        config = Configuration(api_key="special-key")

        auth = config.authenticator

        assert isinstance(auth, ApiKeyStrategy)
        assert auth.api_key == "special-key"

    @pytest.mark.unit
    @pytest.mark.parametrize("api_key", [None, "", "   "])
    def test_api_key_without_key_falls_back_to_no_auth(self, api_key):
        config = Configuration(api_key=api_key)
        assert isinstance(config.authenticator, NoAuth)

    @pytest.mark.unit
    def test_oauth2(self):
        config = Configuration(auth_strategy="oauth2", oauth2_scope="read:pets", timeout=5, **OAUTH2_CREDENTIALS)

        auth = config.authenticator

        assert isinstance(auth, OAuth2Strategy)
        assert auth.client_id == "my-app"
        assert auth.token_url == DEFAULT_TOKEN_URL
        assert auth.scope == "read:pets"
        assert auth._timeout == 5

    @pytest.mark.unit
    def test_oauth2_custom_token_url(self):
        config = Configuration(
            auth_strategy="oauth2", oauth2_token_url="https://auth.example.com/token", **OAUTH2_CREDENTIALS
        )
        assert config.authenticator.token_url == "https://auth.example.com/token"

    @pytest.mark.unit
    def test_oauth2_without_secret_falls_back_to_no_auth(self):
        config = Configuration(auth_strategy="oauth2", oauth2_client_id="my-app")
        assert isinstance(config.authenticator, NoAuth)

    @pytest.mark.unit
    def test_both_with_all_credentials(self):
        config = Configuration(auth_strategy="both", api_key="special-key", **OAUTH2_CREDENTIALS)

        auth = config.authenticator

        assert isinstance(auth, CompositeStrategy)
        assert auth.configured_type_names() == ["ApiKey", "OAuth2"]

    @pytest.mark.unit
    def test_both_with_only_api_key(self):
        config = Configuration(auth_strategy="both", api_key="special-key")

        auth = config.authenticator

        assert isinstance(auth, CompositeStrategy)
        assert auth.configured_type_names() == ["ApiKey"]

    @pytest.mark.unit
    def test_both_without_credentials(self):
        auth = Configuration(auth_strategy="both").authenticator

        assert isinstance(auth, CompositeStrategy)
        assert auth.is_configured() is False

    @pytest.mark.unit
    def test_invalid_strategy(self):
        config = Configuration(auth_strategy="basic")

        with pytest.raises(ConfigurationError) as exc_info:
            config.authenticator

        assert str(exc_info.value) == (
            "Invalid auth_strategy: 'basic'. Must be one of: none, api_key, oauth2, both"
        )

    @pytest.mark.unit
    def test_malformed_credential_raises_validation_error(self):
        with pytest.raises(ValidationError):
            Configuration(api_key="ab").authenticator


class TestAuthenticatorMemoization:
    """The strategy is built once and rebuilt after configure()."""

    @pytest.mark.unit
    def test_memoized(self):
        config = Configuration(api_key="special-key")
        assert config.authenticator is config.authenticator

    @pytest.mark.unit
    def test_configure_rebuilds(self):
        config = Configuration(api_key="special-key")
        first = config.authenticator

        config.configure(api_key="other-key")

        assert config.authenticator is not first
        assert config.authenticator.api_key == "other-key"

    @pytest.mark.unit
    def test_direct_assignment_needs_reset(self):
        config = Configuration(api_key="special-key")
        first = config.authenticator

        config.auth_strategy = "none"
        assert config.authenticator is first

        config.reset_authenticator()
        assert isinstance(config.authenticator, NoAuth)

    @pytest.mark.unit
    def test_configure_returns_self(self):
        config = Configuration()
        assert config.configure(timeout=5) is config
        assert config.timeout == 5

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["api_secret", "_authenticator"])
    def test_configure_rejects_unknown_settings(self, name):
        with pytest.raises(TypeError, match=f"Unknown configuration option: {name}"):
            Configuration().configure(**{name: "x"})

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["validate", "authenticator", "credential_resolver", "reset_authenticator"])
    def test_configure_rejects_non_settings(self, name):
        config = Configuration()

        with pytest.raises(TypeError, match=f"Unknown configuration option: {name}"):
            config.configure(**{name: False})

        assert config.validate() is True

    @pytest.mark.unit
    def test_concurrent_first_access_builds_once(self, monkeypatch):
        config = Configuration(auth_strategy="oauth2", **OAUTH2_CREDENTIALS)
        build = config._build_authenticator
        builds: list[int] = []

        def slow_build():
            builds.append(1)
            time.sleep(0.05)
            return build()

        monkeypatch.setattr(config, "_build_authenticator", slow_build)
        barrier = threading.Barrier(4)
        seen = []

        def worker():
            barrier.wait()
            seen.append(config.authenticator)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(builds) == 1
        assert len(seen) == 4
        assert all(auth is seen[0] for auth in seen)


class TestFromEnv:
    """FROM_ENV resolves credentials from environment variables."""

    @pytest.mark.unit
    def test_api_key_from_env(self, monkeypatch, no_dotenv_resolver):
        monkeypatch.setenv("PETSTORE_API_KEY", "env-key-123")

        config = Configuration(api_key=FROM_ENV, credential_resolver=no_dotenv_resolver)

        assert config.api_key == "env-key-123"
        assert config.authenticator.api_key == "env-key-123"

    @pytest.mark.unit
    def test_oauth2_from_env(self, monkeypatch, no_dotenv_resolver):
        monkeypatch.setenv("PETSTORE_OAUTH2_CLIENT_ID", "env-app")
        monkeypatch.setenv("PETSTORE_OAUTH2_CLIENT_SECRET", "env-secret")
        monkeypatch.setenv("PETSTORE_OAUTH2_SCOPE", "read:pets")

        config = Configuration(
            auth_strategy="oauth2",
            oauth2_client_id=FROM_ENV,
            oauth2_client_secret=FROM_ENV,
            oauth2_scope=FROM_ENV,
            credential_resolver=no_dotenv_resolver,
        )

        assert config.oauth2_client_id == "env-app"
        assert config.authenticator.scope == "read:pets"

    @pytest.mark.unit
    def test_unset_variable_gives_none(self, no_dotenv_resolver):
        config = Configuration(api_key=FROM_ENV, credential_resolver=no_dotenv_resolver)

        assert config.api_key is None
        assert isinstance(config.authenticator, NoAuth)

    @pytest.mark.unit
    def test_configure_with_from_env(self, monkeypatch, no_dotenv_resolver):
        monkeypatch.setenv("PETSTORE_API_KEY", "env-key-123")
        config = Configuration(credential_resolver=no_dotenv_resolver)

        config.configure(api_key=FROM_ENV)

        assert config.api_key == "env-key-123"

    @pytest.mark.unit
    def test_repr(self):
        assert repr(FROM_ENV) == "FROM_ENV"


class TestValidate:
    """validate() checks settings before any request."""

    @pytest.mark.unit
    def test_valid(self):
        assert Configuration(api_key="special-key").validate() is True

    @pytest.mark.unit
    def test_empty_base_url(self):
        with pytest.raises(ValidationError, match="base_url can't be empty"):
            Configuration(base_url="").validate()

    @pytest.mark.unit
    def test_invalid_strategy(self):
        with pytest.raises(ConfigurationError):
            Configuration(auth_strategy="basic").validate()


class TestDefaultConfiguration:
    """The process-wide default configuration."""

    @pytest.mark.unit
    def test_default_is_shared(self):
        assert default_configuration() is default_configuration()

    @pytest.mark.unit
    def test_configure_updates_default(self):
        configure(api_key="special-key", timeout=5)

        config = default_configuration()
        assert config.api_key == "special-key"
        assert config.timeout == 5

    @pytest.mark.unit
    def test_reset(self):
        first = default_configuration()
        reset_default_configuration()
        assert default_configuration() is not first

    @pytest.mark.unit
    def test_package_level_configure(self):
        petstore_client.configure(auth_strategy="none")
        assert default_configuration().auth_strategy == "none"
