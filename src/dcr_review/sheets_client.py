from __future__ import annotations

import logging
from typing import Any

import google.auth
import google.auth.exceptions
import gspread
import requests
from google.oauth2.service_account import Credentials
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from dcr_review.errors import ConfigError, PersistenceError, RetrievalError

_LOG = logging.getLogger(__name__)

_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
]

_STORE_ERRORS = (gspread.exceptions.GSpreadException, requests.RequestException)


def col_num_to_letter(n: int) -> str:
    """Convert 1-based column index to A1 letters (1->A, 26->Z, 27->AA)."""
    result = ""
    while n > 0:
        n, rem = divmod(n - 1, 26)
        result = chr(rem + ord("A")) + result
    return result


def quote_sheet_name(sheet_name: str) -> str:
    return "'" + sheet_name.replace("'", "''") + "'"


def a1_range(
    sheet_name: str,
    start_col: int,
    start_row: int,
    end_col: int,
    end_row: int | None = None,
) -> str:
    """Build an A1 range like ``'Queue'!A5:C`` (open-ended when ``end_row`` is None)."""
    end = f"{col_num_to_letter(end_col)}{end_row if end_row is not None else ''}"
    return f"{quote_sheet_name(sheet_name)}!{col_num_to_letter(start_col)}{start_row}:{end}"


class SheetsRowStore:
    """Row-oriented access to one worksheet of a Google spreadsheet."""

    def __init__(
        self,
        service_account_path: str | None,
        sheet_id: str,
        sheet_name: str,
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        try:
            if service_account_path:
                creds = Credentials.from_service_account_file(  # type: ignore[no-untyped-call]
                    service_account_path,
                    scopes=_SCOPES,
                )
            else:
                creds, _ = google.auth.default(scopes=_SCOPES)  # type: ignore[no-untyped-call]
        except (OSError, ValueError, google.auth.exceptions.DefaultCredentialsError) as exc:
            raise ConfigError(f"Could not load Google credentials: {exc}") from exc
        self._gc = gspread.authorize(creds)
        if timeout_seconds:
            self._gc.set_timeout(timeout_seconds)
        try:
            self._spreadsheet = self._gc.open_by_key(sheet_id)
            self._spreadsheet.worksheet(sheet_name)
        except gspread.exceptions.SpreadsheetNotFound as exc:
            raise ConfigError(f"Spreadsheet not found or not shared: {sheet_id}") from exc
        except gspread.exceptions.WorksheetNotFound as exc:
            raise ConfigError(f"Worksheet {sheet_name!r} not found in spreadsheet {sheet_id}") from exc
        except (*_STORE_ERRORS, PermissionError) as exc:
            raise ConfigError(f"Could not open spreadsheet {sheet_id}: {exc}") from exc
        self.sheet_name = sheet_name

    def range(self, start_col: int, start_row: int, end_col: int, end_row: int | None = None) -> str:
        return a1_range(self.sheet_name, start_col, start_row, end_col, end_row)

    def header(self) -> list[str]:
        rows = self.get_range(f"{quote_sheet_name(self.sheet_name)}!1:1")
        return rows[0] if rows else []

    def get_range(self, range_spec: str) -> list[list[str]]:
        try:
            payload = self._values_get(range_spec)
        except _STORE_ERRORS as exc:
            _LOG.warning("sheets.get_range.error range=%s error=%s", range_spec, exc)
            raise RetrievalError(f"Could not read {range_spec}: {exc}") from exc
        values = payload.get("values", [])
        return [[str(cell) for cell in row] for row in values]

    def update_range(self, range_spec: str, values: list[list[str]]) -> None:
        try:
            resp = self._spreadsheet.values_update(
                range_spec,
                params={"valueInputOption": "RAW"},
                body={"values": values},
            )
        except _STORE_ERRORS as exc:
            _LOG.warning("sheets.update_range.error range=%s error=%s", range_spec, exc)
            raise PersistenceError(f"Could not write {range_spec}: {exc}") from exc
        _LOG.info(
            "sheets.update_range.success range=%s updated_cells=%s",
            range_spec,
            (resp or {}).get("updatedCells", 0),
        )

    @retry(
        reraise=True,
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception_type(gspread.exceptions.APIError),
    )
    def _values_get(self, range_spec: str) -> dict[str, Any]:
        return self._spreadsheet.values_get(range_spec)
