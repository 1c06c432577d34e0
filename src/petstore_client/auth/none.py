"""Null credential strategy."""

import httpx

from petstore_client.auth.base import CredentialStrategy


class NoAuth(CredentialStrategy):
    """Strategy used when no authentication is configured.

    Lets the client always hold a strategy without None checks.
    """

    type_label = "None"

    def apply(self, request: httpx.Request) -> None:
        pass

    def is_configured(self) -> bool:
        return False

    def describe(self) -> str:
        return "None(no authentication)"
