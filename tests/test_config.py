"""Unit tests for credential and timeout resolution."""

from __future__ import annotations

import pytest

from formdesk import ConfigurationError, normalize_base_url, resolve_credentials
from formdesk.config import DEFAULT_TIMEOUT, resolve_timeout

URL = "https://www.formdesk.com/api/rest/v1/acme/forms"


def env_of(**values: str):
    return values.get


# ── normalize_base_url ───────────────────────────────────────────────


def test_normalize_appends_slash():
    assert normalize_base_url(URL) == URL + "/"


def test_normalize_is_idempotent():
    once = normalize_base_url(URL)
    assert normalize_base_url(once) == once


def test_normalize_keeps_multiple_slashes():
    assert normalize_base_url(URL + "//") == URL + "//"


# ── resolve_credentials ──────────────────────────────────────────────


def test_arguments_win_over_env():
    creds = resolve_credentials(
        URL, "arg-key", env_of(FORMDESK_BASE_URL="https://other", FORMDESK_API_KEY="env-key")
    )
    assert creds.base_url == URL + "/"
    assert creds.api_key == "arg-key"


def test_env_fallback():
    creds = resolve_credentials(env=env_of(FORMDESK_BASE_URL=URL, FORMDESK_API_KEY="env-key"))
    assert creds.base_url == URL + "/"
    assert creds.api_key == "env-key"


def test_empty_argument_falls_back_to_env():
    creds = resolve_credentials("", "", env_of(FORMDESK_BASE_URL=URL, FORMDESK_API_KEY="k"))
    assert creds.api_key == "k"


def test_missing_api_key_reported_first():
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_credentials(env=env_of())
    assert "API key not provided" in str(exc_info.value)
    assert exc_info.value.stage == "configuration"


def test_missing_base_url():
    with pytest.raises(ConfigurationError, match="FORMDESK_BASE_URL"):
        resolve_credentials(api_key="k", env=env_of(FORMDESK_BASE_URL=""))


def test_reads_process_env_by_default(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FORMDESK_BASE_URL", URL)
    monkeypatch.setenv("FORMDESK_API_KEY", "proc-key")
    creds = resolve_credentials()
    assert creds.api_key == "proc-key"


def test_api_key_hidden_from_repr():
    creds = resolve_credentials(URL, "super-secret-key-123", env_of())
    assert "super-secret-key-123" not in repr(creds)
    assert URL in repr(creds)


# ── resolve_timeout ──────────────────────────────────────────────────


def test_timeout_default():
    assert resolve_timeout(env=env_of()) == DEFAULT_TIMEOUT == 30.0


def test_timeout_from_env():
    assert resolve_timeout(env=env_of(FORMDESK_TIMEOUT="2.5")) == 2.5


def test_timeout_argument_wins():
    assert resolve_timeout(5, env_of(FORMDESK_TIMEOUT="2.5")) == 5.0


@pytest.mark.parametrize("raw", ["soon", "0", "-3", "nan", "inf", "-inf"])
def test_timeout_invalid(raw: str):
    with pytest.raises(ConfigurationError):
        resolve_timeout(env=env_of(FORMDESK_TIMEOUT=raw))


def test_timeout_nan_argument():
    with pytest.raises(ConfigurationError):
        resolve_timeout(float("nan"), env_of())


def test_non_ascii_api_key():
    with pytest.raises(ConfigurationError, match="non-ASCII"):
        resolve_credentials(URL, "clé-secrète", env_of())


def test_non_ascii_api_key_from_env():
    with pytest.raises(ConfigurationError, match="non-ASCII"):
        resolve_credentials(env=env_of(FORMDESK_BASE_URL=URL, FORMDESK_API_KEY="key”"))
