"""Composite strategy that applies several credential strategies at once.

The Petstore API accepts both an API key and an OAuth2 bearer token; sending
both lets the server accept either.

Example:
    ```python
    composite = CompositeStrategy([ApiKeyStrategy("special-key"), OAuth2Strategy("id", "secret")])
    # Requests now carry both `api_key` and `Authorization: Bearer ...`
    ```
"""

from collections.abc import Sequence

import httpx

from petstore_client.auth.base import CredentialStrategy


class CompositeStrategy(CredentialStrategy):
    """Apply every configured child strategy, in insertion order.

    The configured subset is computed once at construction. Reconfiguring a
    child afterwards is not reflected in this composite.

    Args:
        strategies: Child strategies. Each must provide callable ``apply``
            and ``is_configured``.

    Raises:
        TypeError: If ``strategies`` is not a list or tuple, or an element
            does not implement the strategy interface.
    """

    type_label = "Composite"

    def __init__(self, strategies: Sequence[CredentialStrategy] = ()):
        if not isinstance(strategies, (list, tuple)):
            raise TypeError(f"strategies must be a list or tuple (got {type(strategies).__name__})")

        for index, strategy in enumerate(strategies):
            for method in ("apply", "is_configured"):
                if not callable(getattr(strategy, method, None)):
                    raise TypeError(
                        f"Strategy at index {index} ({type(strategy).__name__}) must implement {method}()"
                    )

        self._strategies = tuple(strategies)
        self._configured_strategies = tuple(s for s in self._strategies if s.is_configured())

    @property
    def strategies(self) -> tuple[CredentialStrategy, ...]:
        return self._strategies

    def apply(self, request: httpx.Request) -> None:
        for strategy in self._configured_strategies:
            strategy.apply(request)

    def is_configured(self) -> bool:
        return bool(self._configured_strategies)

    def configured_type_names(self) -> list[str]:
        return [_type_name(s) for s in self._configured_strategies]

    def describe(self) -> str:
        all_types = ", ".join(_type_name(s) for s in self._strategies)
        configured = ", ".join(self.configured_type_names()) or "none"
        return f"Composite(strategies=[{all_types}], configured=[{configured}])"


def _type_name(strategy: object) -> str:
    type_name = getattr(strategy, "type_name", None)
    return type_name() if callable(type_name) else type(strategy).__name__
