"""Base class for credential strategies.

A credential strategy knows how to attach one kind of credential to an
outgoing :class:`httpx.Request`. The set of strategies is small and fixed:
:class:`~petstore_client.auth.none.NoAuth`,
:class:`~petstore_client.auth.api_key.ApiKeyStrategy`,
:class:`~petstore_client.auth.oauth2.OAuth2Strategy` and
:class:`~petstore_client.auth.composite.CompositeStrategy`.
"""

import logging
from abc import ABC, abstractmethod

import httpx

from petstore_client.errors.exceptions import ValidationError

logger = logging.getLogger(__name__)


class CredentialStrategy(ABC):
    """Interface shared by every credential strategy.

    Subclasses implement :meth:`apply` and :meth:`is_configured`; the helpers
    below cover validation, masking, and the insecure-transport warning.
    """

    type_label: str = "Base"

    @abstractmethod
    def apply(self, request: httpx.Request) -> None:
        """Add credentials to the outgoing request's headers.

        Must be a no-op when the strategy is not configured.
        """

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True if this strategy has the credentials it needs."""

    def type_name(self) -> str:
        """Stable identifier used in logs and diagnostics."""
        return self.type_label

    def describe(self) -> str:
        """Human-readable representation that never reveals secrets.

        Only the credential portion is masked. The fixed label text around it
        (``ApiKey(api_key=...)``) can coincidentally contain a very short
        secret such as ``"api"``; the secret itself is still rendered as ``***``.
        """
        return f"{self.type_name()}()"

    def __repr__(self) -> str:
        return self.describe()

    __str__ = __repr__

    @staticmethod
    def validate_credential_length(value: str, field_name: str, min_length: int) -> None:
        if len(value) >= min_length:
            return
        raise ValidationError(f"{field_name} must be at least {min_length} characters (got {len(value)})")

    @staticmethod
    def validate_no_newlines(value: str, field_name: str) -> None:
        if "\n" in value or "\r" in value:
            raise ValidationError(f"{field_name} contains newline characters")

    @staticmethod
    def validate_no_whitespace(value: str, field_name: str) -> None:
        if value == value.strip():
            return
        raise ValidationError(f"{field_name} has leading/trailing whitespace (did you copy-paste incorrectly?)")

    @staticmethod
    def mask_credential(value: str, visible_chars: int = 3) -> str:
        """Mask a credential for safe display.

        Shows the first ``visible_chars`` characters and replaces the rest
        with ``*``. Values no longer than ``visible_chars`` are fully masked
        as ``***``.
        """
        if len(value) <= visible_chars:
            return "***"
        return value[:visible_chars] + "*" * (len(value) - visible_chars)

    def warn_if_insecure(self, request: httpx.Request) -> None:
        if request.url.scheme == "https":
            return
        logger.warning(
            f"Sending {self.type_name()} credentials over insecure {request.url.scheme} connection "
            f"to {request.url.host}; use HTTPS to protect credentials"
        )

    def _unconfigured_description(self) -> str:
        return f"{self.type_name()}(not configured)"
