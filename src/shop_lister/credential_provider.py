"""
CredentialProvider module for resolving the configured endpoint and Basic Auth credentials
"""

import os
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Protocol

from shop_lister.config_loader import DEFAULT_API_KEY_ENV, DEFAULT_API_SECRET_ENV
from shop_lister.settings_store import ENDPOINT_URL_KEY, API_KEY_KEY, API_SECRET_KEY


NOT_CONFIGURED_MESSAGE = (
    "API settings are not configured. "
    "Please set them with 'shop-lister settings set'."
)

logger = logging.getLogger(__name__)


class NotConfiguredError(Exception):
    """Raised when the endpoint URL or credentials have not been set"""

    def __init__(self, message: str = NOT_CONFIGURED_MESSAGE):
        super().__init__(message)


class SettingsSource(Protocol):
    """Anything that can hand out a snapshot of the stored settings"""

    def get_all(self) -> Dict[str, str]:
        ...


@dataclass
class Credentials:
    """Endpoint base URL plus Basic Auth username and password"""
    base_url: str
    username: str
    password: str

    def clear(self) -> None:
        """Drop the secret once the request that needed it is done"""
        self.password = ""

    def __repr__(self) -> str:
        return (
            f"Credentials(base_url={self.base_url!r}, username={self.username!r}, "
            f"password='***')"
        )


class CredentialProvider:
    """Reads the stored settings, letting environment variables override the secrets"""

    def __init__(self, settings: SettingsSource, api_key_env: str = DEFAULT_API_KEY_ENV,
                 api_secret_env: str = DEFAULT_API_SECRET_ENV):
        self.settings = settings
        self.api_key_env = api_key_env
        self.api_secret_env = api_secret_env

    def get_credentials(self) -> Credentials:
        """
        Resolve the endpoint and credentials from one settings snapshot

        Returns:
            Credentials with all three values present

        Raises:
            NotConfiguredError: If any of the three values is absent or empty
        """
        stored = self.settings.get_all()

        base_url = _clean(stored.get(ENDPOINT_URL_KEY))
        username = _clean(os.getenv(self.api_key_env)) or _clean(stored.get(API_KEY_KEY))
        password = _clean(os.getenv(self.api_secret_env)) or _clean(stored.get(API_SECRET_KEY))

        if not (base_url and username and password):
            missing = [
                name for name, value in (
                    (ENDPOINT_URL_KEY, base_url),
                    (API_KEY_KEY, username),
                    (API_SECRET_KEY, password)
                ) if not value
            ]
            logger.warning(f"Settings incomplete, missing: {', '.join(missing)}")
            raise NotConfiguredError()

        return Credentials(base_url=base_url, username=username, password=password)

    @contextmanager
    def acquire(self) -> Iterator[Credentials]:
        """
        Hand out credentials for the duration of one request

        Yields:
            Credentials, whose secret is cleared when the block exits

        Raises:
            NotConfiguredError: If the settings are incomplete
        """
        credentials = self.get_credentials()
        try:
            yield credentials
        finally:
            credentials.clear()


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()
