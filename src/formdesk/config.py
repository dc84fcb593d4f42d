"""Credential, endpoint and timeout resolution.

Values are resolved per call: an explicit argument wins, otherwise the
environment is consulted through an ``EnvReader``. Nothing is cached.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Callable, Optional

from formdesk.errors import ConfigurationError

EnvReader = Callable[[str], Optional[str]]

API_KEY_ENV = "FORMDESK_API_KEY"
BASE_URL_ENV = "FORMDESK_BASE_URL"
TIMEOUT_ENV = "FORMDESK_TIMEOUT"

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Credentials:
    """Resolved base URL and bearer token for one request."""

    base_url: str
    api_key: str = field(repr=False)


def normalize_base_url(url: str) -> str:
    """Return ``url`` with a single trailing ``/`` appended if it has none."""
    if url.endswith("/"):
        return url
    return url + "/"


def _from_env(value: Optional[str], name: str, env: EnvReader) -> Optional[str]:
    if value:
        return value
    return env(name) or None


def resolve_credentials(
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    env: Optional[EnvReader] = None,
) -> Credentials:
    """Resolve credentials from arguments, falling back to the environment.

    Args:
        base_url: Forms endpoint. Defaults to ``FORMDESK_BASE_URL``.
        api_key: Bearer token. Defaults to ``FORMDESK_API_KEY``.
        env: Environment reader. Defaults to ``os.environ.get``.

    Returns:
        Credentials with a normalized base URL.

    Raises:
        ConfigurationError: If either value is still empty after resolution,
            or the API key cannot be sent as a header value.
    """
    env = env or os.environ.get

    # API key first so a missing key is reported before a missing URL
    resolved_key = _from_env(api_key, API_KEY_ENV, env)
    if resolved_key is None:
        raise ConfigurationError(
            f"API key not provided and {API_KEY_ENV} environment variable not set"
        )
    if not resolved_key.isascii():
        raise ConfigurationError("API key contains non-ASCII characters")

    resolved_url = _from_env(base_url, BASE_URL_ENV, env)
    if resolved_url is None:
        raise ConfigurationError(
            f"Base URL not provided and {BASE_URL_ENV} environment variable not set"
        )

    return Credentials(base_url=normalize_base_url(resolved_url), api_key=resolved_key)


def resolve_timeout(timeout: Optional[float] = None, env: Optional[EnvReader] = None) -> float:
    """Resolve the request timeout in seconds (argument > ``FORMDESK_TIMEOUT`` > 30)."""
    env = env or os.environ.get
    raw = timeout if timeout is not None else env(TIMEOUT_ENV)
    if raw is None or raw == "":
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid timeout: {raw!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"Timeout must be a positive finite number, got {value}")
    return value
