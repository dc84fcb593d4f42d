"""Error types for Formdesk SDK."""

from __future__ import annotations

from typing import Optional


class FormdeskError(Exception):
    """Base error for Formdesk SDK.

    Attributes:
        message: Human-readable diagnostic.
        stage: Stage of the fetch that failed ('configuration', 'network',
            'status' or 'parse').
        status_code: HTTP status code (None unless the server answered).
        is_connectivity_error: True if the error is due to a transport failure.
    """

    stage = "unknown"
    is_connectivity_error = False

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigurationError(FormdeskError):
    """Credentials, endpoint or timeout could not be resolved."""

    stage = "configuration"


class NetworkError(FormdeskError):
    """The request did not complete (connection, DNS, timeout, protocol)."""

    stage = "network"
    is_connectivity_error = True


class ApiError(FormdeskError):
    """The API answered with a status other than 200."""

    stage = "status"


class ParseError(FormdeskError):
    """A 200 response whose body is not a JSON array of objects."""

    stage = "parse"
