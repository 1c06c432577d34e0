"""Typed error taxonomy and HTTP error mapping for the Petstore client."""

from petstore_client.errors.exceptions import (
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
from petstore_client.errors.handler import map_transport_error, raise_for_status

__all__ = [
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "ConnectionError",
    "ErrorKind",
    "InvalidInputError",
    "InvalidOrderError",
    "NotFoundError",
    "PetstoreError",
    "RateLimitError",
    "ValidationError",
    "map_transport_error",
    "raise_for_status",
]
