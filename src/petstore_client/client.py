"""HTTP client for the Petstore API.

:class:`Client` ties the pieces together: the configured credential strategy
is applied by an :class:`~petstore_client.transport.auth.AuthenticationInterceptor`,
requests go through a :class:`~petstore_client.transport.retry.RetryTransport`,
and responses are wrapped in :class:`~petstore_client.response.Response` and
classified into typed errors.

Example:
    ```python
    from petstore_client import Client, Configuration

    config = Configuration(api_key="special-key")
    with Client(config) as client:
        pet = client.get("/pet/1").body
    ```
"""

import logging
from collections.abc import Mapping
from threading import Lock
from typing import Any, Protocol, runtime_checkable

import httpx

from petstore_client.config import Configuration, default_configuration
from petstore_client.errors.exceptions import APIError, PetstoreError
from petstore_client.errors.handler import map_transport_error, raise_for_status
from petstore_client.response import Response
from petstore_client.transport.auth import AuthenticationInterceptor
from petstore_client.transport.retry import RetryTransport

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


@runtime_checkable
class WireFormat(Protocol):
    """Resource model that can serialize itself for a request body."""

    def to_wire_format(self) -> dict[str, Any]: ...


class Client:
    """Synchronous Petstore API client.

    A single instance may be shared between threads. Changing the
    configuration while requests are in flight is not supported.

    Args:
        configuration: Client settings. A fresh :class:`Configuration` with
            defaults is used when omitted.
        transport: Base transport to send requests through. Defaults to
            :class:`httpx.HTTPTransport`; tests pass an :class:`httpx.MockTransport`.

    Raises:
        ValidationError: If the configuration or its credentials are invalid.
        ConfigurationError: If the auth strategy is unknown.
    """

    def __init__(self, configuration: Configuration | None = None, *, transport: httpx.BaseTransport | None = None):
        self.configuration = configuration or Configuration()
        self.configuration.validate()
        self._transport = transport
        self._connection: httpx.Client | None = None
        self._connection_lock = Lock()

    @classmethod
    def from_default(cls, **kwargs: Any) -> "Client":
        """Create a client bound to the process-wide default configuration."""
        return cls(default_configuration(), **kwargs)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def connection(self) -> httpx.Client:
        """The underlying :class:`httpx.Client`, built on first use."""
        connection = self._connection
        if connection is not None:
            return connection

        with self._connection_lock:
            if self._connection is None:
                self._connection = self._build_connection()
            return self._connection

    def reset_connection(self) -> None:
        """Close and discard the cached connection; the next request rebuilds it."""
        with self._connection_lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def close(self) -> None:
        self.reset_connection()

    def configure(self, **settings: Any) -> "Client":
        """Update configuration settings and rebuild the connection on next use.

        Returns:
            self, for chaining
        """
        self.configuration.configure(**settings)
        self.reset_connection()
        return self

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Response:
        """Send a GET request.

        Args:
            path: Endpoint path, e.g. ``"/pet/123"``
            params: Optional query parameters

        Returns:
            The wrapped response.

        Raises:
            NotFoundError: On 404.
            InvalidInputError: On 400/405.
            RateLimitError: On 429 once retries are exhausted.
            ConnectionError: On network failures or timeouts.
            APIError: For any other error.
        """
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Mapping[str, Any] | WireFormat | None = None) -> Response:
        """Send a POST request with a JSON body.

        Raises:
            InvalidOrderError: On 400 responses typed "InvalidOrder".
            InvalidInputError: On other 400 responses and 405.
        """
        return self.request("POST", path, body=body)

    def put(self, path: str, body: Mapping[str, Any] | WireFormat | None = None) -> Response:
        return self.request("PUT", path, body=body)

    def delete(self, path: str, params: Mapping[str, Any] | None = None) -> Response:
        return self.request("DELETE", path, params=params)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | WireFormat | None = None,
    ) -> Response:
        """Send a request and classify the outcome.

        Errors already in the client's taxonomy propagate unchanged; other
        failures are wrapped in ConnectionError or APIError.
        """
        logger.debug(f"{method} {path}")

        try:
            kwargs: dict[str, Any] = {}
            if params:
                kwargs["params"] = dict(params)
            payload = self._serialize_body(body)
            if payload is not None:
                kwargs["json"] = payload

            raw_response = self.connection.request(
                method,
                path,
                auth=AuthenticationInterceptor(self.configuration.authenticator),
                **kwargs,
            )
            response = Response(raw_response)
            raise_for_status(response)
            return response
        except PetstoreError:
            raise
        except httpx.TransportError as e:
            raise map_transport_error(e) from e
        except Exception as e:
            raise APIError(f"Request failed: {e}") from e

    def _build_connection(self) -> httpx.Client:
        config = self.configuration
        transport = self._transport or httpx.HTTPTransport()
        if config.retry_enabled:
            transport = RetryTransport(wrapped_transport=transport, max_retries=config.max_retries)

        logger.debug(f"Opening connection to {config.base_url} (retry_enabled={config.retry_enabled})")
        return httpx.Client(
            base_url=config.base_url,
            headers=DEFAULT_HEADERS,
            timeout=httpx.Timeout(config.timeout, connect=config.open_timeout),
            transport=transport,
        )

    @staticmethod
    def _serialize_body(body: Mapping[str, Any] | WireFormat | None) -> dict[str, Any] | None:
        if body is None:
            return None
        if isinstance(body, WireFormat):
            return body.to_wire_format()
        return dict(body)
