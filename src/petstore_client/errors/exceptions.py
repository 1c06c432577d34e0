"""Structured exceptions for the Petstore client.

Every error raised by the client inherits from :class:`PetstoreError` and
carries an :class:`ErrorKind`, so callers can catch by class or branch on
``error_kind``.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from petstore_client.response import Response


class ErrorKind(str, Enum):
    """Category of a client failure."""

    VALIDATION = "Validation"
    CONFIGURATION = "Configuration"
    AUTHENTICATION = "Authentication"
    NOT_FOUND = "NotFound"
    INVALID_INPUT = "InvalidInput"
    INVALID_ORDER = "InvalidOrder"
    CONNECTION = "Connection"
    RATE_LIMIT = "RateLimit"
    GENERIC = "Generic"


class PetstoreError(Exception):
    """Base exception for all client errors."""

    error_kind: ErrorKind = ErrorKind.GENERIC
    default_status_code: int | None = None

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "Response | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.response = response


class ValidationError(PetstoreError):
    """Bad input caught before any network call (e.g. malformed credentials)."""

    error_kind = ErrorKind.VALIDATION


class ConfigurationError(PetstoreError):
    """Invalid declarative settings, such as an unknown auth strategy."""

    error_kind = ErrorKind.CONFIGURATION


class AuthenticationError(PetstoreError):
    """Credential exchange with the authorization server failed."""

    error_kind = ErrorKind.AUTHENTICATION
    default_status_code = 401


class NotFoundError(PetstoreError):
    """404 Not Found."""

    error_kind = ErrorKind.NOT_FOUND
    default_status_code = 404


class InvalidInputError(PetstoreError):
    """400/405 responses for invalid input."""

    error_kind = ErrorKind.INVALID_INPUT
    default_status_code = 405


class InvalidOrderError(PetstoreError):
    """400 response the server tagged as an invalid order."""

    error_kind = ErrorKind.INVALID_ORDER
    default_status_code = 400


class ConnectionError(PetstoreError):  # noqa: A001
    """Transport-level failure, no response was obtained."""

    error_kind = ErrorKind.CONNECTION


class RateLimitError(PetstoreError):
    """429 Too Many Requests."""

    error_kind = ErrorKind.RATE_LIMIT
    default_status_code = 429

    def __init__(self, message: str, retry_after: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class APIError(PetstoreError):
    """Catch-all for server errors without a more specific mapping."""

    error_kind = ErrorKind.GENERIC
