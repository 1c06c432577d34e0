"""Client configuration and credential strategy selection.

:class:`Configuration` holds connection settings and credentials, and builds
the credential strategy named by ``auth_strategy``:

| auth_strategy | Strategy |
|---------------|----------|
| ``none`` | :class:`NoAuth` |
| ``api_key`` | :class:`ApiKeyStrategy`, or :class:`NoAuth` without a key |
| ``oauth2`` | :class:`OAuth2Strategy`, or :class:`NoAuth` without client credentials |
| ``both`` | :class:`CompositeStrategy` over whichever of the two are configured |

The strategy is memoized. Changing settings through :meth:`Configuration.configure`
rebuilds it; direct attribute assignment requires a call to
:meth:`Configuration.reset_authenticator`.

Example:
    ```python
    from petstore_client.config import FROM_ENV, Configuration

    config = Configuration(auth_strategy="both", api_key=FROM_ENV)
    config.configure(oauth2_client_id="my-app", oauth2_client_secret="my-secret")
    config.authenticator  # CompositeStrategy(...)
    ```
"""

import logging
from threading import Lock
from typing import Any

from petstore_client.auth import ApiKeyStrategy, CompositeStrategy, CredentialResolver, NoAuth, OAuth2Strategy
from petstore_client.auth.base import CredentialStrategy
from petstore_client.auth.credentials import (
    ENV_API_KEY,
    ENV_OAUTH2_CLIENT_ID,
    ENV_OAUTH2_CLIENT_SECRET,
    ENV_OAUTH2_SCOPE,
    ENV_OAUTH2_TOKEN_URL,
)
from petstore_client.auth.oauth2 import DEFAULT_TOKEN_URL
from petstore_client.errors.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://petstore.swagger.io/v2"

VALID_AUTH_STRATEGIES = ("none", "api_key", "oauth2", "both")


class _FromEnv:
    """Sentinel asking for a credential to be read from the environment."""

    def __repr__(self) -> str:
        return "FROM_ENV"


FROM_ENV = _FromEnv()

# Credential attribute -> environment variable consulted for FROM_ENV
_ENV_VARS = {
    "api_key": ENV_API_KEY,
    "oauth2_client_id": ENV_OAUTH2_CLIENT_ID,
    "oauth2_client_secret": ENV_OAUTH2_CLIENT_SECRET,
    "oauth2_token_url": ENV_OAUTH2_TOKEN_URL,
    "oauth2_scope": ENV_OAUTH2_SCOPE,
}

# Names accepted by Configuration.configure()
SETTINGS = frozenset(
    ["base_url", "timeout", "open_timeout", "retry_enabled", "max_retries", "auth_strategy", *_ENV_VARS]
)


class Configuration:
    """Settings for a Petstore client.

    Args:
        base_url: API root URL.
        timeout: Per-request timeout in seconds.
        open_timeout: Connect timeout in seconds.
        retry_enabled: Retry transient failures.
        max_retries: Additional attempts after the first.
        auth_strategy: One of ``none``, ``api_key``, ``oauth2``, ``both``.
        credential_resolver: Resolver used for ``FROM_ENV`` credentials.
            A default resolver (which loads ``.env``) is created on first use.
        **credentials: ``api_key``, ``oauth2_client_id``,
            ``oauth2_client_secret``, ``oauth2_token_url``, ``oauth2_scope``.
            Each accepts a string, None, or ``FROM_ENV``.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30,
        open_timeout: float = 10,
        retry_enabled: bool = True,
        max_retries: int = 2,
        auth_strategy: str = "api_key",
        credential_resolver: CredentialResolver | None = None,
        **credentials: str | _FromEnv | None,
    ):
        unknown = set(credentials) - set(_ENV_VARS)
        if unknown:
            raise TypeError(f"Unexpected configuration options: {', '.join(sorted(unknown))}")

        self.base_url = base_url
        self.timeout = timeout
        self.open_timeout = open_timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries
        self.auth_strategy = auth_strategy
        self._credential_resolver = credential_resolver
        self._authenticator: CredentialStrategy | None = None
        self._authenticator_lock = Lock()

        self._credentials: dict[str, str | None] = dict.fromkeys(_ENV_VARS)
        for name, value in credentials.items():
            setattr(self, name, value)

    @property
    def api_key(self) -> str | None:
        return self._credentials["api_key"]

    @api_key.setter
    def api_key(self, value: str | _FromEnv | None) -> None:
        self._set_credential("api_key", value)

    @property
    def oauth2_client_id(self) -> str | None:
        return self._credentials["oauth2_client_id"]

    @oauth2_client_id.setter
    def oauth2_client_id(self, value: str | _FromEnv | None) -> None:
        self._set_credential("oauth2_client_id", value)

    @property
    def oauth2_client_secret(self) -> str | None:
        return self._credentials["oauth2_client_secret"]

    @oauth2_client_secret.setter
    def oauth2_client_secret(self, value: str | _FromEnv | None) -> None:
        self._set_credential("oauth2_client_secret", value)

    @property
    def oauth2_token_url(self) -> str | None:
        return self._credentials["oauth2_token_url"]

    @oauth2_token_url.setter
    def oauth2_token_url(self, value: str | _FromEnv | None) -> None:
        self._set_credential("oauth2_token_url", value)

    @property
    def oauth2_scope(self) -> str | None:
        return self._credentials["oauth2_scope"]

    @oauth2_scope.setter
    def oauth2_scope(self, value: str | _FromEnv | None) -> None:
        self._set_credential("oauth2_scope", value)

    @property
    def credential_resolver(self) -> CredentialResolver:
        if self._credential_resolver is None:
            self._credential_resolver = CredentialResolver()
        return self._credential_resolver

    @property
    def authenticator(self) -> CredentialStrategy:
        """The credential strategy for the current settings (memoized).

        Raises:
            ConfigurationError: If ``auth_strategy`` is not a valid mode.
            ValidationError: If a configured credential is malformed.
        """
        authenticator = self._authenticator
        if authenticator is not None:
            return authenticator

        with self._authenticator_lock:
            if self._authenticator is None:
                self._authenticator = self._build_authenticator()
                logger.debug(f"Built authenticator: {self._authenticator!r}")
            return self._authenticator

    def reset_authenticator(self) -> None:
        """Drop the memoized strategy so the next access rebuilds it."""
        with self._authenticator_lock:
            self._authenticator = None

    def configure(self, **settings: Any) -> "Configuration":
        """Update settings and rebuild the authenticator on next use.

        Returns:
            self, for chaining
        """
        unknown = set(settings) - SETTINGS
        if unknown:
            raise TypeError(f"Unknown configuration option: {', '.join(sorted(unknown))}")

        for name, value in settings.items():
            setattr(self, name, value)
        self.reset_authenticator()
        return self

    def validate(self) -> bool:
        """Check the configuration before any request is made.

        Raises:
            ValidationError: If base_url is empty or a credential is malformed.
            ConfigurationError: If auth_strategy is invalid.
        """
        if not self.base_url:
            raise ValidationError("base_url can't be empty")
        # Building the strategy validates its credentials
        _ = self.authenticator
        return True

    def _set_credential(self, name: str, value: str | _FromEnv | None) -> None:
        if value is FROM_ENV:
            value = self.credential_resolver.resolve(env_var_name=_ENV_VARS[name])
        self._credentials[name] = value

    def _build_authenticator(self) -> CredentialStrategy:
        strategy = self.auth_strategy
        if strategy == "none":
            return NoAuth()
        if strategy == "api_key":
            return self._build_api_key() if self._api_key_configured() else NoAuth()
        if strategy == "oauth2":
            return self._build_oauth2() if self._oauth2_configured() else NoAuth()
        if strategy == "both":
            strategies: list[CredentialStrategy] = []
            if self._api_key_configured():
                strategies.append(self._build_api_key())
            if self._oauth2_configured():
                strategies.append(self._build_oauth2())
            return CompositeStrategy(strategies)

        valid = ", ".join(VALID_AUTH_STRATEGIES)
        raise ConfigurationError(f"Invalid auth_strategy: {strategy!r}. Must be one of: {valid}")

    def _build_api_key(self) -> ApiKeyStrategy:
        return ApiKeyStrategy(self.api_key)

    def _build_oauth2(self) -> OAuth2Strategy:
        return OAuth2Strategy(
            client_id=self.oauth2_client_id,
            client_secret=self.oauth2_client_secret,
            token_url=self.oauth2_token_url or DEFAULT_TOKEN_URL,
            scope=self.oauth2_scope,
            timeout=self.timeout,
        )

    def _api_key_configured(self) -> bool:
        return bool(self.api_key and str(self.api_key).strip())

    def _oauth2_configured(self) -> bool:
        return all(
            value and str(value).strip() for value in (self.oauth2_client_id, self.oauth2_client_secret)
        )


_default_configuration: Configuration | None = None


def default_configuration() -> Configuration:
    """Return the process-wide default configuration, creating it if needed."""
    global _default_configuration
    if _default_configuration is None:
        _default_configuration = Configuration()
    return _default_configuration


def configure(**settings: Any) -> Configuration:
    """Update the process-wide default configuration."""
    return default_configuration().configure(**settings)


def reset_default_configuration() -> None:
    """Discard the process-wide default configuration (for test isolation)."""
    global _default_configuration
    _default_configuration = None
