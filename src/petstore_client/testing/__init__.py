"""Testing utilities for code built on the Petstore client.

Provides response factories, a mock transport helper, and a recording
credential strategy, so tests never touch the network.

Example:
    ```python
    from petstore_client import Client, Configuration
    from petstore_client.testing import create_error_response, mock_transport


    def test_handles_404():
        transport = mock_transport(lambda request: create_error_response(404, "Pet not found"))
        client = Client(Configuration(auth_strategy="none"), transport=transport)
        ...
    ```
"""

from collections.abc import Callable
from typing import Any

import httpx

from petstore_client.auth.base import CredentialStrategy


def create_mock_response(
    status_code: int = 200,
    json: Any = None,
    text: str | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build an :class:`httpx.Response` with a JSON or text body."""
    if json is not None:
        return httpx.Response(status_code, json=json, headers=headers)
    if text is not None:
        return httpx.Response(status_code, text=text, headers=headers)
    return httpx.Response(status_code, headers=headers)


def create_error_response(
    status_code: int,
    message: str | None = None,
    error_type: str | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build an error response in the Petstore ``{code, type, message}`` shape."""
    body: dict[str, Any] = {"code": status_code}
    if error_type is not None:
        body["type"] = error_type
    if message is not None:
        body["message"] = message
    return httpx.Response(status_code, json=body, headers=headers)


def mock_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    requests: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Wrap ``handler`` in a MockTransport, optionally recording each request."""

    def record(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return httpx.MockTransport(record)


class RecordingStrategy(CredentialStrategy):
    """Credential strategy that sets a header and records each call.

    Args:
        name: Identifier appended to ``calls`` and used as ``type_name()``.
        configured: Value returned by ``is_configured()``.
        calls: Shared list to record into, for checking ordering across strategies.
        header: Header to set when applied.
    """

    def __init__(
        self,
        name: str = "Recording",
        *,
        configured: bool = True,
        calls: list[str] | None = None,
        header: str | None = None,
    ):
        self.name = name
        self.configured = configured
        self.calls = calls if calls is not None else []
        self.header = header or f"X-{name}"

    def apply(self, request: httpx.Request) -> None:
        self.calls.append(self.name)
        request.headers[self.header] = self.name

    def is_configured(self) -> bool:
        return self.configured

    def type_name(self) -> str:
        return self.name


__all__ = ["RecordingStrategy", "create_error_response", "create_mock_response", "mock_transport"]
