from __future__ import annotations

from typing import Any

import pytest

from dcr_review.errors import ConfigError
from dcr_review.settings import load_settings

_ENV_KEYS = (
    "GOOGLE_SHEETS_ID",
    "REVIEW_SHEET_NAME",
    "GOOGLE_SERVICE_ACCOUNT_JSON",
    "SHEETS_TIMEOUT_SECONDS",
    "FETCH_TIMEOUT_SECONDS",
    "CAPI_KEY",
    "LOCAL_DCR",
    "REJECT_DUPLICATE_DECISIONS",
    "HOST",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: Any) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("dcr_review.settings.load_dotenv", lambda **kwargs: None)


def test_missing_sheet_id(monkeypatch: Any) -> None:
    monkeypatch.setenv("REVIEW_SHEET_NAME", "Queue")

    with pytest.raises(ConfigError, match="GOOGLE_SHEETS_ID"):
        load_settings()


def test_missing_sheet_name(monkeypatch: Any) -> None:
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "abc123")

    with pytest.raises(ConfigError, match="REVIEW_SHEET_NAME"):
        load_settings()


def test_defaults(monkeypatch: Any) -> None:
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "abc123")
    monkeypatch.setenv("REVIEW_SHEET_NAME", "Queue")

    settings = load_settings()

    assert settings.google_service_account_json is None
    assert settings.capi_key == "test"
    assert settings.local_dcr is False
    assert settings.reject_duplicate_decisions is True
    assert settings.port == 8080
    assert settings.sheets_timeout_seconds == 15.0


def test_overrides_win_over_env(monkeypatch: Any) -> None:
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "from-env")
    monkeypatch.setenv("LOCAL_DCR", "TRUE")
    monkeypatch.setenv("PORT", "9000")

    settings = load_settings(sheet_id="from-flag", sheet_name="Tab")

    assert settings.google_sheets_id == "from-flag"
    assert settings.review_sheet_name == "Tab"
    assert settings.local_dcr is True
    assert settings.port == 9000


def test_bad_number(monkeypatch: Any) -> None:
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "abc123")
    monkeypatch.setenv("REVIEW_SHEET_NAME", "Queue")
    monkeypatch.setenv("PORT", "eighty")

    with pytest.raises(ConfigError, match="PORT"):
        load_settings()


def test_bad_log_level(monkeypatch: Any) -> None:
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "abc123")
    monkeypatch.setenv("REVIEW_SHEET_NAME", "Queue")
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ConfigError, match="LOG_LEVEL"):
        load_settings()


def test_log_level_is_normalised(monkeypatch: Any) -> None:
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "abc123")
    monkeypatch.setenv("REVIEW_SHEET_NAME", "Queue")
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    assert load_settings().log_level == "DEBUG"
