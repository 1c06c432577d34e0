"""OAuth2 client-credentials strategy with token caching.

Implements the Client Credentials grant (RFC 6749 section 4.4) for
server-to-server authentication. Access tokens are fetched on first use,
cached on the strategy instance, and replaced when they are within
``TOKEN_REFRESH_BUFFER`` of expiring.

Security Considerations:
    - The client secret is masked in ``describe()``/``repr()`` output
    - Token refresh is serialized with a lock, so concurrent requests sharing
      one strategy trigger a single token fetch
    - Tokens live in memory only

Example:
    ```python
    from petstore_client.auth import OAuth2Strategy

    auth = OAuth2Strategy(
        client_id="my-client-id",
        client_secret="my-secret",
        scope="read:pets write:pets",
    )
    ```
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from threading import Lock
from typing import Any

import httpx

from petstore_client.auth.base import CredentialStrategy
from petstore_client.auth.credentials import (
    ENV_OAUTH2_CLIENT_ID,
    ENV_OAUTH2_CLIENT_SECRET,
    ENV_OAUTH2_SCOPE,
    ENV_OAUTH2_TOKEN_URL,
    CredentialResolver,
)
from petstore_client.errors.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URL = "https://petstore.swagger.io/oauth/token"

# Refresh tokens this long before they expire
TOKEN_REFRESH_BUFFER = timedelta(seconds=60)


@dataclass(frozen=True)
class Token:
    """Access token returned by the token endpoint."""

    value: str
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) >= self.expires_at


class OAuth2Strategy(CredentialStrategy):
    """Send ``Authorization: Bearer <token>`` obtained via client credentials.

    Args:
        client_id: OAuth2 client ID.
        client_secret: OAuth2 client secret.
        token_url: Token endpoint URL (defaults to the Petstore endpoint).
        scope: Space-separated scopes; omitted from the token request when None.
        http_client: Client used for token requests. A short-lived client is
            created per fetch when not given.
        timeout: Timeout in seconds for token requests.

    Raises:
        ValidationError: If either credential is shorter than 3 characters
            or contains newlines.
    """

    type_label = "OAuth2"

    MIN_ID_LENGTH = 3
    MIN_SECRET_LENGTH = 3
    VISIBLE_SECRET_CHARS = 3

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        token_url: str | None = DEFAULT_TOKEN_URL,
        scope: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        timeout: float = 30.0,
    ):
        self._client_id = _strip(client_id)
        self._client_secret = _strip(client_secret)
        self._token_url = token_url or DEFAULT_TOKEN_URL
        self._scope = _strip(scope)
        self._http_client = http_client
        self._timeout = timeout
        self._token: Token | None = None
        self._token_lock = Lock()

        if self.is_configured():
            self._validate()

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None, **kwargs: Any) -> "OAuth2Strategy":
        """Build a strategy from the ``PETSTORE_OAUTH2_*`` environment variables."""
        resolver = resolver or CredentialResolver()
        return cls(
            client_id=resolver.resolve(env_var_name=ENV_OAUTH2_CLIENT_ID),
            client_secret=resolver.resolve(env_var_name=ENV_OAUTH2_CLIENT_SECRET),
            token_url=resolver.resolve(
                env_var_name=ENV_OAUTH2_TOKEN_URL, default=DEFAULT_TOKEN_URL, mask_in_logs=False
            ),
            scope=resolver.resolve(env_var_name=ENV_OAUTH2_SCOPE, mask_in_logs=False),
            **kwargs,
        )

    @property
    def client_id(self) -> str | None:
        return self._client_id

    @property
    def client_secret(self) -> str | None:
        return self._client_secret

    @property
    def token_url(self) -> str:
        return self._token_url

    @property
    def scope(self) -> str | None:
        return self._scope

    @property
    def token(self) -> Token | None:
        return self._token

    def apply(self, request: httpx.Request) -> None:
        if not self.is_configured():
            return

        self.warn_if_insecure(request)
        token = self._ensure_valid_token()
        request.headers["Authorization"] = f"Bearer {token.value}"

    def is_configured(self) -> bool:
        return bool(self._client_id) and bool(self._client_secret)

    def fetch_token(self) -> Token:
        """Fetch a new access token and cache it, replacing any existing one.

        Raises:
            AuthenticationError: If the token endpoint rejects the request or
                returns an unusable response.
        """
        with self._token_lock:
            self._token = self._request_token()
            return self._token

    def is_token_stale(self, now: datetime | None = None) -> bool:
        """Return True if the cached token is missing, expired, or about to expire."""
        token = self._token
        if token is None:
            return True

        now = now or datetime.now(UTC)
        if token.is_expired(now):
            return True
        if token.expires_at is None:
            return False
        return now >= token.expires_at - TOKEN_REFRESH_BUFFER

    def describe(self) -> str:
        if not self.is_configured():
            return self._unconfigured_description()

        masked_secret = self.mask_credential(self._client_secret, self.VISIBLE_SECRET_CHARS)
        if self._token is None:
            token_status = "no token"
        elif self.is_token_stale():
            token_status = "token expired"
        else:
            token_status = "token valid"

        return f"OAuth2(client_id={self._client_id}, client_secret={masked_secret}, {token_status})"

    def _ensure_valid_token(self) -> Token:
        # Check and refresh in one critical section so concurrent callers
        # never fetch twice or observe a token mid-replacement.
        with self._token_lock:
            if self.is_token_stale():
                self._token = self._request_token()
            return self._token

    def _request_token(self) -> Token:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._client_id,
            "client_secret": self._client_secret,
        }
        if self._scope is not None:
            data["scope"] = self._scope

        logger.debug(f"Fetching OAuth2 token from {self._token_url} for client {self._client_id}")

        if self._http_client is not None:
            response = self._post_token_request(self._http_client, data)
        else:
            with httpx.Client(timeout=self._timeout) as client:
                response = self._post_token_request(client, data)

        token = self._parse_token_response(response)
        logger.debug(f"Obtained OAuth2 token (expires at {token.expires_at})")
        return token

    def _post_token_request(self, client: httpx.Client, data: dict[str, str]) -> httpx.Response:
        return client.post(self._token_url, data=data, headers={"Accept": "application/json"})

    def _parse_token_response(self, response: httpx.Response) -> Token:
        if not response.is_success:
            detail = _extract_error_detail(response)
            raise AuthenticationError(
                f"OAuth2 token fetch failed: {detail}",
                status_code=response.status_code,
            )

        try:
            token_data = response.json()
        except ValueError:
            raise AuthenticationError(
                "OAuth2 token fetch failed: invalid JSON response from token endpoint"
            ) from None

        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not access_token:
            raise AuthenticationError("OAuth2 token fetch failed: response missing 'access_token' field")

        expires_at = None
        expires_in = token_data.get("expires_in")
        if expires_in is not None:
            try:
                expires_at = datetime.now(UTC) + timedelta(seconds=float(expires_in))
            except (ValueError, TypeError):
                logger.warning(f"Ignoring invalid expires_in value from token endpoint: {expires_in!r}")

        return Token(value=str(access_token), expires_at=expires_at)

    def _validate(self) -> None:
        self.validate_credential_length(self._client_id, "OAuth2 client_id", self.MIN_ID_LENGTH)
        self.validate_credential_length(self._client_secret, "OAuth2 client_secret", self.MIN_SECRET_LENGTH)
        self.validate_no_newlines(self._client_id, "OAuth2 client_id")
        self.validate_no_newlines(self._client_secret, "OAuth2 client_secret")


def _strip(value: str | None) -> str | None:
    return None if value is None else str(value).strip()


def _extract_error_detail(response: httpx.Response) -> str:
    """Build a readable message from an OAuth2 error response."""
    try:
        error_data = response.json()
    except ValueError:
        text = response.text[:200]
        return text or f"HTTP {response.status_code}"

    if not isinstance(error_data, dict):
        return f"HTTP {response.status_code}"

    error = error_data.get("error", f"HTTP {response.status_code}")
    description = error_data.get("error_description")
    if description:
        return f"{error}: {description}"
    return str(error)
