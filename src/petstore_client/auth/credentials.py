"""Environment-backed credential resolution.

Credentials are read from the environment, including a ``.env`` file loaded
through python-dotenv. An environment variable takes priority over the
default passed to :meth:`CredentialResolver.resolve`.

Environment variables read by the client:
- ``PETSTORE_API_KEY``
- ``PETSTORE_OAUTH2_CLIENT_ID``
- ``PETSTORE_OAUTH2_CLIENT_SECRET``
- ``PETSTORE_OAUTH2_TOKEN_URL``
- ``PETSTORE_OAUTH2_SCOPE``

Example:
    ```python
    from petstore_client.auth import CredentialResolver

    resolver = CredentialResolver()
    api_key = resolver.resolve(env_var_name="PETSTORE_API_KEY")
    ```
"""

import logging
import os
from threading import Lock

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_API_KEY = "PETSTORE_API_KEY"
ENV_OAUTH2_CLIENT_ID = "PETSTORE_OAUTH2_CLIENT_ID"
ENV_OAUTH2_CLIENT_SECRET = "PETSTORE_OAUTH2_CLIENT_SECRET"
ENV_OAUTH2_TOKEN_URL = "PETSTORE_OAUTH2_TOKEN_URL"
ENV_OAUTH2_SCOPE = "PETSTORE_OAUTH2_SCOPE"


class CredentialResolver:
    """Resolve credentials from the environment or defaults.

    The ``.env`` file is loaded at most once per resolver, under a lock, so a
    resolver can be shared between threads.

    Attributes:
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories for one.
            load_dotenv: Whether to load a .env file at all. Disable in tests
                or when the environment is managed elsewhere.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except Exception as e:
                logger.warning(f"Failed to load .env file: {e}")
            # Mark as attempted either way; a broken .env must not block resolution
            self._dotenv_loaded = True

    def _mask_credential(self, value: str | None) -> str:
        if value is None:
            return "None"
        return "***"

    def resolve(
        self,
        env_var_name: str,
        *,
        default: str | None = None,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a credential from the environment.

        Args:
            env_var_name: Environment variable name to check.
            default: Value used when the variable is not set.
            mask_in_logs: Mask the resolved value in debug logs.

        Returns:
            Resolved credential value, or None if not found.
        """
        if env_var_name in os.environ:
            result: str | None = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        else:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        return result
