"""
Client configuration.

Defaults target the production Kraken REST API.  Every value can be
overridden through environment variables, optionally loaded from a
``.env`` file::

    KRAKEN_API_URL       base URL (default https://api.kraken.com)
    KRAKEN_API_VERSION   API version path segment (default 0)
    KRAKEN_USER_AGENT    User-Agent header
    KRAKEN_TIMEOUT       request timeout in seconds (default 10)
    KRAKEN_API_KEY       API key for private endpoints
    KRAKEN_API_SECRET    base64 API secret for private endpoints
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

API_URL = "https://api.kraken.com"
API_VERSION = "0"
USER_AGENT = "Kraken Python API Agent (krakenapi)"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint settings shared by every request a client makes."""

    url: str = API_URL
    api_version: str = API_VERSION
    user_agent: str = USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    def base_path(self, visibility: str, method: str) -> str:
        """Return the URL path for *method*, e.g. ``/0/public/Time``."""
        return f"/{self.api_version}/{visibility}/{method}"


def _load_env(env_file: Optional[str]) -> None:
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()


def load_config(env_file: Optional[str] = None) -> ClientConfig:
    """
    Build a ``ClientConfig`` from the environment.

    Raises
    ------
    ValueError
        If ``KRAKEN_TIMEOUT`` is set but is not a positive number.
    """
    _load_env(env_file)

    timeout_raw = os.getenv("KRAKEN_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"Invalid KRAKEN_TIMEOUT '{timeout_raw}'. Must be a number.")
        if timeout <= 0:
            raise ValueError(f"KRAKEN_TIMEOUT must be positive, got {timeout}.")

    return ClientConfig(
        url=os.getenv("KRAKEN_API_URL", API_URL).rstrip("/"),
        api_version=os.getenv("KRAKEN_API_VERSION", API_VERSION),
        user_agent=os.getenv("KRAKEN_USER_AGENT", USER_AGENT),
        timeout=timeout,
    )


def load_credentials(env_file: Optional[str] = None) -> Tuple[str, str]:
    """Return ``(api_key, api_secret)``; either may be empty for public-only use."""
    _load_env(env_file)
    return os.getenv("KRAKEN_API_KEY", ""), os.getenv("KRAKEN_API_SECRET", "")
