from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from dcr_review.errors import ConfigError


@dataclass(frozen=True, slots=True)
class Settings:
    google_sheets_id: str
    review_sheet_name: str
    google_service_account_json: str | None
    sheets_timeout_seconds: float
    fetch_timeout_seconds: float
    capi_key: str
    local_dcr: bool
    reject_duplicate_decisions: bool
    host: str
    port: int
    log_level: str


def _required(name: str, override: str | None = None) -> str:
    value = (override or os.getenv(name, "")).strip()
    if not value:
        raise ConfigError(f"Missing required environment variable: {name}")
    return value


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _log_level() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if level not in _LOG_LEVELS:
        allowed = ", ".join(_LOG_LEVELS)
        raise ConfigError(f"LOG_LEVEL must be one of {allowed}, got {level!r}")
    return level


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _number(name: str, default: str, cast: type[int] | type[float]) -> int | float:
    raw = os.getenv(name, default).strip() or default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def load_settings(
    *,
    dotenv_path: str | None = None,
    sheet_id: str | None = None,
    sheet_name: str | None = None,
) -> Settings:
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path)
    else:
        load_dotenv()

    return Settings(
        google_sheets_id=_required("GOOGLE_SHEETS_ID", sheet_id),
        review_sheet_name=_required("REVIEW_SHEET_NAME", sheet_name),
        google_service_account_json=os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON", "").strip() or None,
        sheets_timeout_seconds=float(_number("SHEETS_TIMEOUT_SECONDS", "15", float)),
        fetch_timeout_seconds=float(_number("FETCH_TIMEOUT_SECONDS", "20", float)),
        capi_key=os.getenv("CAPI_KEY", "").strip() or "test",
        local_dcr=_flag("LOCAL_DCR", "false"),
        reject_duplicate_decisions=_flag("REJECT_DUPLICATE_DECISIONS", "true"),
        host=os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0",
        port=int(_number("PORT", "8080", int)),
        log_level=_log_level(),
    )
