"""Formdesk async and sync HTTP clients.

Usage::

    result = fetch_forms()  # FORMDESK_BASE_URL / FORMDESK_API_KEY from env
    if result.ok:
        for form in result.forms:
            print(form.id, form.name)
    else:
        print(result.message)

    async with FormdeskClient(timeout=10) as client:
        result = await client.fetch_forms("https://www.formdesk.com/api/rest/v1/acme/forms", "key")
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

try:
    import httpx
except ImportError:
    raise ImportError("httpx is required. Install with: pip install formdesk-sdk")

from formdesk.config import Credentials, EnvReader, resolve_credentials, resolve_timeout
from formdesk.errors import (
    ApiError,
    ConfigurationError,
    FormdeskError,
    NetworkError,
    ParseError,
)
from formdesk.types import FetchResult, ResultSet

logger = logging.getLogger("formdesk.client")

# Failures the HTTP layer can raise before a response exists
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


def _headers(credentials: Credentials) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {credentials.api_key}",
        "Accept": "application/json",
    }


def _failure(error: FormdeskError, level: int = logging.ERROR) -> FetchResult:
    result = FetchResult.failure(error)
    logger.log(level, "Formdesk %s", result.message)
    return result


def _chained(error: FormdeskError, exc: Exception) -> FormdeskError:
    """Return ``error`` as if raised ``from exc``, traceback included."""
    try:
        raise error from exc
    except FormdeskError as chained:
        return chained


def _network_failure(url: str, exc: Exception) -> FetchResult:
    error = NetworkError(f"Error during API request to {url}: {type(exc).__name__}: {exc}")
    return _failure(_chained(error, exc), logging.WARNING)


def _handle_response(url: str, resp: httpx.Response) -> FetchResult:
    """Classify a response and project a 200 body into a ResultSet."""
    if resp.status_code != 200:
        return _failure(
            ApiError(
                f"Error fetching forms from {url}. Status code: {resp.status_code}",
                status_code=resp.status_code,
            )
        )

    try:
        data = resp.json()
    except ValueError as exc:
        error = ParseError(f"Response from {url} is not valid JSON: {exc}", status_code=200)
        return _failure(_chained(error, exc))

    if not isinstance(data, list):
        return _failure(
            ParseError(
                f"Expected a JSON array of forms from {url}, got {type(data).__name__}",
                status_code=200,
            )
        )

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            return _failure(
                ParseError(
                    f"Form at index {index} is {type(item).__name__}, expected an object",
                    status_code=200,
                )
            )

    forms = ResultSet.from_response(data)
    logger.debug("Fetched %d forms from %s", len(forms), url)
    return FetchResult.success(forms)


class FormdeskClient:
    """Async HTTP client for the Formdesk forms API.

    Credentials are not held by the client; they are resolved on every
    :meth:`fetch_forms` call.

    Parameters:
        timeout: Request timeout in seconds. Defaults to ``FORMDESK_TIMEOUT`` env var or 30.
        env: Environment reader used for fallbacks. Defaults to ``os.environ.get``.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``).

    Raises:
        ConfigurationError: If the timeout is invalid.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        *,
        env: Optional[EnvReader] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._env = env
        self._timeout = resolve_timeout(timeout, env)
        self._http = httpx.AsyncClient(timeout=self._timeout, transport=transport)

    async def __aenter__(self) -> "FormdeskClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def fetch_forms(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> FetchResult:
        """List the forms of the account.

        Args:
            base_url: Forms endpoint. Defaults to ``FORMDESK_BASE_URL``.
            api_key: Bearer token. Defaults to ``FORMDESK_API_KEY``.

        Returns:
            FetchResult holding a ResultSet, or the error of the failed stage.
        """
        try:
            credentials = resolve_credentials(base_url, api_key, self._env)
        except ConfigurationError as exc:
            return _failure(exc)

        url = credentials.base_url
        try:
            resp = await self._http.get(url, headers=_headers(credentials))
        except _TRANSPORT_ERRORS as exc:
            return _network_failure(url, exc)

        return _handle_response(url, resp)


class FormdeskClientSync:
    """Blocking HTTP client for the Formdesk forms API.

    Same parameters as :class:`FormdeskClient`; ``transport`` must be a
    sync ``httpx.BaseTransport``.

    Usage::

        with FormdeskClientSync() as client:
            forms = client.fetch_forms().unwrap()
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        *,
        env: Optional[EnvReader] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._env = env
        self._timeout = resolve_timeout(timeout, env)
        self._http = httpx.Client(timeout=self._timeout, transport=transport)

    def __enter__(self) -> "FormdeskClientSync":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def fetch_forms(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> FetchResult:
        """List the forms of the account. See :meth:`FormdeskClient.fetch_forms`."""
        try:
            credentials = resolve_credentials(base_url, api_key, self._env)
        except ConfigurationError as exc:
            return _failure(exc)

        url = credentials.base_url
        try:
            resp = self._http.get(url, headers=_headers(credentials))
        except _TRANSPORT_ERRORS as exc:
            return _network_failure(url, exc)

        return _handle_response(url, resp)


def fetch_forms(
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
    env: Optional[EnvReader] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> FetchResult:
    """Fetch the form list with a short-lived blocking client.

    Never raises for configuration, network, status or parse failures;
    inspect ``result.ok`` / ``result.error`` or call ``result.unwrap()``.
    """
    try:
        client = FormdeskClientSync(timeout, env=env, transport=transport)
    except ConfigurationError as exc:
        return _failure(exc)

    with client:
        return client.fetch_forms(base_url, api_key)
