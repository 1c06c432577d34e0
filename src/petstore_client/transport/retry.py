"""Retry transport for the Petstore client.

Retries transient failures with exponential backoff and random jitter:

| Condition | Retried |
|-----------|---------|
| 429, 500, 502, 503, 504 | Yes |
| Other 4xx / 5xx | No, returned for error classification |
| Timeouts and network errors | Yes, re-raised once attempts run out |

All of GET, POST, PUT and DELETE are retried. The Petstore API has no
idempotency keys, so a retried POST can create a duplicate resource.

Example:
    ```python
    from petstore_client.transport.retry import RetryTransport
    import httpx

    transport = RetryTransport(wrapped_transport=httpx.HTTPTransport(), max_retries=2)

    with httpx.Client(transport=transport) as client:
        response = client.get("https://petstore.swagger.io/v2/pet/1")
    ```
"""

import logging
import random
import time
from collections.abc import Callable

import httpx

logger = logging.getLogger(__name__)


class RetryTransport(httpx.BaseTransport):
    """Transport that retries transient failures with jittered exponential backoff.

    The delay before retry ``n`` (1-indexed) is
    ``backoff_interval * backoff_factor ** (n - 1)`` plus a random jitter of
    up to ``jitter_ratio`` of that value. With the defaults: ~0.5s, ~1s, ~2s.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_retries: Additional attempts after the first (default: 2)
        backoff_interval: Delay before the first retry in seconds (default: 0.5)
        backoff_factor: Multiplier applied per retry (default: 2)
        jitter_ratio: Maximum random jitter as a fraction of the delay (default: 0.5)
        retry_status_codes: Status codes that trigger a retry
        retry_methods: HTTP methods eligible for retry
        sleep: Function used to wait between attempts (default: time.sleep)
    """

    DEFAULT_RETRY_STATUS_CODES: frozenset[int] = frozenset([429, 500, 502, 503, 504])

    DEFAULT_RETRY_METHODS: frozenset[str] = frozenset(["GET", "POST", "PUT", "DELETE"])

    RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (httpx.TimeoutException, httpx.NetworkError)

    def __init__(
        self,
        *,
        wrapped_transport: httpx.BaseTransport,
        max_retries: int = 2,
        backoff_interval: float = 0.5,
        backoff_factor: float = 2.0,
        jitter_ratio: float = 0.5,
        retry_status_codes: frozenset[int] | None = None,
        retry_methods: frozenset[str] | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.max_retries = max_retries
        self.backoff_interval = backoff_interval
        self.backoff_factor = backoff_factor
        self.jitter_ratio = jitter_ratio
        self.retry_status_codes = retry_status_codes or self.DEFAULT_RETRY_STATUS_CODES
        self.retry_methods = retry_methods or self.DEFAULT_RETRY_METHODS
        self._sleep = sleep or time.sleep

    def __enter__(self):
        self._wrapped_transport.__enter__()
        return self

    def __exit__(self, exc_type=None, exc_val=None, exc_tb=None):
        self._wrapped_transport.__exit__(exc_type, exc_val, exc_tb)

    def close(self) -> None:
        self._wrapped_transport.close()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, retrying transient failures.

        Returns:
            The first non-retryable response, or the last response once
            retries are exhausted.

        Raises:
            httpx.TransportError: The last network error once retries are exhausted.
        """
        retries = 0

        while True:
            try:
                response = self._wrapped_transport.handle_request(request)
            except self.RETRY_EXCEPTIONS as e:
                if not self._can_retry(request, retries):
                    raise

                retries += 1
                delay = self._calculate_backoff_delay(retries)
                logger.warning(
                    f"Request {request.method} {request.url} failed with {e!r}, "
                    f"retrying in {delay:.2f}s (attempt {retries}/{self.max_retries})"
                )
                self._sleep(delay)
                continue

            if response.status_code not in self.retry_status_codes or not self._can_retry(request, retries):
                return response

            retries += 1
            delay = self._calculate_backoff_delay(retries)
            logger.warning(
                f"Request {request.method} {request.url} failed with {response.status_code}, "
                f"retrying in {delay:.2f}s (attempt {retries}/{self.max_retries})"
            )
            response.close()
            self._sleep(delay)

    def _can_retry(self, request: httpx.Request, current_retries: int) -> bool:
        if current_retries >= self.max_retries:
            return False
        return request.method in self.retry_methods

    def _calculate_backoff_delay(self, retry_number: int) -> float:
        """Calculate the jittered exponential backoff delay.

        Args:
            retry_number: Current retry attempt (1-indexed)

        Returns:
            Delay in seconds
        """
        delay = self.backoff_interval * (self.backoff_factor ** (retry_number - 1))
        return delay + random.uniform(0, delay * self.jitter_ratio)
