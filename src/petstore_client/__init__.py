"""Petstore Client - typed HTTP client for the Swagger Petstore API.

This library provides:
- Pluggable credential strategies (API key, OAuth2 client credentials, both, none)
- Automatic retry with jittered exponential backoff
- Typed errors mapped from HTTP status codes and transport failures

Example:
    ```python
    from petstore_client import Client, Configuration, NotFoundError

    config = Configuration(auth_strategy="api_key", api_key="special-key")

    with Client(config) as client:
        try:
            pet = client.get("/pet/1").body
        except NotFoundError:
            pet = None
    ```
"""

from petstore_client.client import Client
from petstore_client.config import (
    FROM_ENV,
    Configuration,
    configure,
    default_configuration,
    reset_default_configuration,
)
from petstore_client.errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    ErrorKind,
    InvalidInputError,
    InvalidOrderError,
    NotFoundError,
    PetstoreError,
    RateLimitError,
    ValidationError,
)
from petstore_client.response import Response

__version__ = "0.1.0"

__all__ = [
    "FROM_ENV",
    "APIError",
    "AuthenticationError",
    "Client",
    "Configuration",
    "ConfigurationError",
    "ConnectionError",
    "ErrorKind",
    "InvalidInputError",
    "InvalidOrderError",
    "NotFoundError",
    "PetstoreError",
    "RateLimitError",
    "Response",
    "ValidationError",
    "__version__",
    "configure",
    "default_configuration",
    "reset_default_configuration",
]
