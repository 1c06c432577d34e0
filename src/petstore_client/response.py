"""Read-only wrapper around HTTP responses from the Petstore API."""

import json
from typing import Any

import httpx


class Response:
    """Parsed view of an :class:`httpx.Response`.

    The body is decoded once at construction: JSON when the server declares a
    JSON content type, text otherwise. Empty or ``null`` bodies normalize to an
    empty dict.

    Example:
        ```python
        response = client.get("/pet/1")
        if response.is_success:
            print(response.body["name"])
        ```
    """

    def __init__(self, raw_response: httpx.Response):
        self._raw_response = raw_response
        self._status = raw_response.status_code
        self._headers = raw_response.headers
        self._body = self._parse_body(raw_response)

    @property
    def status(self) -> int:
        return self._status

    @property
    def body(self) -> Any:
        return self._body

    @property
    def headers(self) -> httpx.Headers:
        """Response headers; lookups are case-insensitive."""
        return self._headers

    @property
    def raw_response(self) -> httpx.Response:
        return self._raw_response

    @property
    def is_success(self) -> bool:
        return 200 <= self._status <= 299

    @property
    def is_error(self) -> bool:
        return not self.is_success

    @property
    def error_message(self) -> str | None:
        """Human-readable error message, or None for successful responses.

        Handles JSON bodies with a ``message`` field, plain-text bodies, and
        HTML error pages (which are replaced with a generic message).
        """
        if self.is_success:
            return None

        body = self._body
        if isinstance(body, dict):
            return body.get("message") or "Unknown error"
        if isinstance(body, str) and body:
            if "<html" in body.lower():
                return f"Request failed with status {self._status}"
            return body
        return f"Request failed with status {self._status}"

    @property
    def error_code(self) -> Any:
        """Error code from the body, falling back to the HTTP status."""
        if self.is_success:
            return None
        if isinstance(self._body, dict):
            return self._body.get("code", self._status)
        return self._status

    @property
    def error_type(self) -> str | None:
        if self.is_success:
            return None
        if isinstance(self._body, dict):
            return self._body.get("type")
        return None

    def __repr__(self) -> str:
        return f"<Response [{self._status}]>"

    @staticmethod
    def _parse_body(raw_response: httpx.Response) -> Any:
        if not raw_response.content:
            return {}

        content_type = raw_response.headers.get("content-type", "")
        if "json" in content_type:
            try:
                parsed = json.loads(raw_response.content)
            except ValueError:
                # Server claimed JSON but sent something else
                parsed = raw_response.text
            return {} if parsed is None else parsed

        text = raw_response.text
        return text if text.strip() else {}
