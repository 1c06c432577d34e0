"""Error mapping for HTTP responses and transport failures."""

import httpx

from petstore_client.errors.exceptions import (
    APIError,
    ConnectionError,
    InvalidInputError,
    InvalidOrderError,
    NotFoundError,
    PetstoreError,
    RateLimitError,
)
from petstore_client.response import Response

INVALID_ORDER_TYPE = "InvalidOrder"


def raise_for_status(response: Response) -> None:
    """Raise the typed exception matching an error response.

    Status code mapping:
    - 404: NotFoundError
    - 400: InvalidOrderError when the body ``type`` is "InvalidOrder",
      InvalidInputError otherwise
    - 405: InvalidInputError
    - 429: RateLimitError (carries the Retry-After header)
    - anything else: APIError

    Args:
        response: Wrapped HTTP response

    Raises:
        PetstoreError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status
    message = response.error_message or f"Request failed with status {status_code}"

    if status_code == 404:
        exc_class: type[PetstoreError] = NotFoundError
    elif status_code == 400:
        exc_class = InvalidOrderError if response.error_type == INVALID_ORDER_TYPE else InvalidInputError
    elif status_code == 405:
        exc_class = InvalidInputError
    elif status_code == 429:
        raise RateLimitError(
            message,
            retry_after=response.headers.get("retry-after"),
            status_code=status_code,
            response=response,
        )
    else:
        exc_class = APIError

    raise exc_class(message, status_code=status_code, response=response)


def map_transport_error(error: httpx.TransportError) -> ConnectionError:
    """Translate an httpx transport failure into a ConnectionError.

    Timeouts (including connect timeouts) are reported as "Request timeout",
    every other transport failure as "Connection failed".
    """
    if isinstance(error, httpx.TimeoutException):
        return ConnectionError(f"Request timeout: {error}")
    return ConnectionError(f"Connection failed: {error}")
