from __future__ import annotations

import logging
from typing import Any

_REDACT_KEYS = {
    "api_key",
    "authorization",
    "credentials",
    "service_account",
    "token",
    "secret",
}
_MASK_KEYS = {"sheet_id", "spreadsheet_id", "google_sheets_id"}
_NOISY_LOGGERS = ("urllib3", "google.auth", "werkzeug")


def mask_id(value: str) -> str:
    """Keep enough of a spreadsheet key to recognise it in logs."""
    if len(value) > 12:
        return value[:6] + "…" + value[-4:]
    return "****"


class RedactingFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.args, dict):
            record.args = {k: self._redact(k, v) for k, v in record.args.items()}
        return super().format(record)

    def _redact(self, key: str, value: Any) -> Any:
        lowered = key.lower()
        if any(s in lowered for s in _REDACT_KEYS):
            return "***REDACTED***"
        if lowered in _MASK_KEYS and isinstance(value, str):
            return mask_id(value)
        return value


def setup_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(RedactingFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    # Per-request chatter from these drowns out queue events at INFO.
    quiet = max(logging.WARNING, root.level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
