"""Formdesk Python SDK: list the forms of an account as a flat table."""

from formdesk.client import FormdeskClient, FormdeskClientSync, fetch_forms
from formdesk.config import Credentials, normalize_base_url, resolve_credentials
from formdesk.errors import (
    ApiError,
    ConfigurationError,
    FormdeskError,
    NetworkError,
    ParseError,
)
from formdesk.types import FetchResult, FormRecord, ResultSet

__all__ = [
    "fetch_forms",
    "FormdeskClient",
    "FormdeskClientSync",
    "Credentials",
    "normalize_base_url",
    "resolve_credentials",
    "FormdeskError",
    "ConfigurationError",
    "NetworkError",
    "ApiError",
    "ParseError",
    "FetchResult",
    "FormRecord",
    "ResultSet",
]
