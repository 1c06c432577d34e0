"""Authentication interceptor for outgoing requests."""

from collections.abc import Generator

import httpx

from petstore_client.auth.base import CredentialStrategy


class AuthenticationInterceptor(httpx.Auth):
    """Apply a credential strategy to each request before it is sent.

    The strategy is only applied when it reports itself configured, so an
    unconfigured strategy never touches the request.

    Example:
        ```python
        auth = AuthenticationInterceptor(ApiKeyStrategy("special-key"))
        with httpx.Client(auth=auth) as client:
            client.get("https://petstore.swagger.io/v2/store/inventory")
        ```
    """

    def __init__(self, strategy: CredentialStrategy):
        self.strategy = strategy

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if self.strategy.is_configured():
            self.strategy.apply(request)
        yield request
