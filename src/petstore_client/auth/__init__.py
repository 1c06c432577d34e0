"""Credential strategies for the Petstore client.

This module provides:
- API key, OAuth2 client-credentials, composite, and null strategies
- Environment/.env credential resolution

Example:
    ```python
    from petstore_client.auth import ApiKeyStrategy, CompositeStrategy, OAuth2Strategy

    auth = CompositeStrategy(
        [
            ApiKeyStrategy("special-key"),
            OAuth2Strategy(client_id="my-app", client_secret="my-secret"),
        ]
    )
    ```
"""

from petstore_client.auth.api_key import ApiKeyStrategy
from petstore_client.auth.base import CredentialStrategy
from petstore_client.auth.composite import CompositeStrategy
from petstore_client.auth.credentials import CredentialResolver
from petstore_client.auth.none import NoAuth
from petstore_client.auth.oauth2 import DEFAULT_TOKEN_URL, OAuth2Strategy, Token

__all__ = [
    "DEFAULT_TOKEN_URL",
    "ApiKeyStrategy",
    "CompositeStrategy",
    "CredentialResolver",
    "CredentialStrategy",
    "NoAuth",
    "OAuth2Strategy",
    "Token",
]
