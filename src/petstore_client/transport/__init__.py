"""Transport layer components for the Petstore client.

Modules:
    auth: Authentication interceptor (an ``httpx.Auth`` applying a credential strategy)
    retry: Retry transport with jittered exponential backoff

Example:
    ```python
    import httpx

    from petstore_client.auth import ApiKeyStrategy
    from petstore_client.transport import AuthenticationInterceptor, RetryTransport

    client = httpx.Client(
        base_url="https://petstore.swagger.io/v2",
        transport=RetryTransport(wrapped_transport=httpx.HTTPTransport()),
        auth=AuthenticationInterceptor(ApiKeyStrategy("special-key")),
    )
    ```
"""

from petstore_client.transport.auth import AuthenticationInterceptor
from petstore_client.transport.retry import RetryTransport

__all__ = ["AuthenticationInterceptor", "RetryTransport"]
