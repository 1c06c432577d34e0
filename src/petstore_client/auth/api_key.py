"""API key credential strategy.

The Petstore API accepts an ``api_key`` request header.

Example:
    ```python
    from petstore_client.auth import ApiKeyStrategy

    auth = ApiKeyStrategy("special-key")

    # Or from PETSTORE_API_KEY
    auth = ApiKeyStrategy.from_env()
    ```
"""

import httpx

from petstore_client.auth.base import CredentialStrategy
from petstore_client.auth.credentials import ENV_API_KEY, CredentialResolver


class ApiKeyStrategy(CredentialStrategy):
    """Send a static API key in the ``api_key`` header.

    The key is stripped before it is stored, but validation runs against the
    original input: a key with surrounding whitespace is rejected so that
    copy-paste mistakes surface early.

    Args:
        api_key: The API key, or None for an unconfigured strategy.

    Raises:
        ValidationError: If a non-empty key is shorter than 3 characters,
            contains newlines, or has leading/trailing whitespace.
    """

    type_label = "ApiKey"

    HEADER_NAME = "api_key"
    MIN_KEY_LENGTH = 3
    VISIBLE_CHARS = 4

    def __init__(self, api_key: str | None = None):
        original = None if api_key is None else str(api_key)
        self._api_key = None if original is None else original.strip()

        if self.is_configured():
            self._validate(original)

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None) -> "ApiKeyStrategy":
        """Build a strategy from the ``PETSTORE_API_KEY`` environment variable."""
        resolver = resolver or CredentialResolver()
        return cls(resolver.resolve(env_var_name=ENV_API_KEY))

    @property
    def api_key(self) -> str | None:
        return self._api_key

    def apply(self, request: httpx.Request) -> None:
        if not self.is_configured():
            return

        self.warn_if_insecure(request)
        request.headers[self.HEADER_NAME] = self._api_key

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def describe(self) -> str:
        if not self.is_configured():
            return self._unconfigured_description()
        return f"ApiKey(api_key={self.mask_credential(self._api_key, self.VISIBLE_CHARS)})"

    def _validate(self, original: str) -> None:
        self.validate_credential_length(self._api_key, "API key", self.MIN_KEY_LENGTH)
        self.validate_no_newlines(original, "API key")
        self.validate_no_whitespace(original, "API key")
