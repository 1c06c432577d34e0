"""Tests for structured client exceptions."""

import builtins

import httpx
import pytest

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
from petstore_client.response import Response

ALL_ERRORS = [
    ValidationError,
    ConfigurationError,
    AuthenticationError,
    NotFoundError,
    InvalidInputError,
    InvalidOrderError,
    ConnectionError,
    RateLimitError,
    APIError,
]


@pytest.mark.unit
def test_petstore_error_instantiation():
    """Test PetstoreError can be instantiated with all attributes."""
    response = Response(httpx.Response(500))

    error = PetstoreError("Test error", status_code=500, response=response)

    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.status_code == 500
    assert error.response is response


@pytest.mark.unit
@pytest.mark.parametrize("exc_class", ALL_ERRORS)
def test_exception_inheritance(exc_class):
    """Every client error can be caught as PetstoreError."""
    assert issubclass(exc_class, PetstoreError)


@pytest.mark.unit
def test_connection_error_is_not_builtin():
    """ConnectionError belongs to the client hierarchy, not the builtin one."""
    assert ConnectionError is not builtins.ConnectionError
    assert not issubclass(ConnectionError, OSError)


@pytest.mark.unit
@pytest.mark.parametrize(
    "exc_class, kind",
    [
        (ValidationError, ErrorKind.VALIDATION),
        (ConfigurationError, ErrorKind.CONFIGURATION),
        (AuthenticationError, ErrorKind.AUTHENTICATION),
        (NotFoundError, ErrorKind.NOT_FOUND),
        (InvalidInputError, ErrorKind.INVALID_INPUT),
        (InvalidOrderError, ErrorKind.INVALID_ORDER),
        (ConnectionError, ErrorKind.CONNECTION),
        (RateLimitError, ErrorKind.RATE_LIMIT),
        (APIError, ErrorKind.GENERIC),
    ],
)
def test_error_kind(exc_class, kind):
    assert exc_class("boom").error_kind is kind


@pytest.mark.unit
@pytest.mark.parametrize(
    "exc_class, status_code",
    [
        (AuthenticationError, 401),
        (NotFoundError, 404),
        (InvalidInputError, 405),
        (InvalidOrderError, 400),
        (RateLimitError, 429),
        (ValidationError, None),
        (ConfigurationError, None),
        (ConnectionError, None),
        (APIError, None),
    ],
)
def test_default_status_codes(exc_class, status_code):
    assert exc_class("boom").status_code == status_code


@pytest.mark.unit
def test_explicit_status_code_overrides_default():
    assert InvalidInputError("Invalid ID supplied", status_code=400).status_code == 400


@pytest.mark.unit
def test_rate_limit_error_retry_after():
    """Test RateLimitError keeps the raw Retry-After value."""
    error = RateLimitError("Rate limited", retry_after="60")

    assert error.retry_after == "60"
    assert error.status_code == 429


@pytest.mark.unit
def test_rate_limit_error_without_retry_after():
    assert RateLimitError("Rate limited").retry_after is None


@pytest.mark.unit
def test_error_kind_values_are_strings():
    assert ErrorKind.NOT_FOUND == "NotFound"
    assert ErrorKind.RATE_LIMIT.value == "RateLimit"
