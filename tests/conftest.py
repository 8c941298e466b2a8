from __future__ import annotations

import re

import pytest

from dcr_review.errors import PersistenceError, RetrievalError
from dcr_review.sheets_client import a1_range

_RANGE_RE = re.compile(r"!([A-Z]+)(\d+):([A-Z]+)(\d*)$")


def _col(letters: str) -> int:
    n = 0
    for ch in letters:
        n = n * 26 + (ord(ch) - ord("A") + 1)
    return n


class FakeRowStore:
    """In-memory sheet that answers like the Sheets values API (trailing blanks dropped)."""

    def __init__(self, rows: list[list[str]], sheet_name: str = "Queue") -> None:
        self.sheet_name = sheet_name
        self.rows = [list(r) for r in rows]
        self.reads: list[str] = []
        self.writes: list[tuple[str, list[list[str]]]] = []
        self.fail_reads = False
        self.fail_writes = False

    def range(self, start_col: int, start_row: int, end_col: int, end_row: int | None = None) -> str:
        return a1_range(self.sheet_name, start_col, start_row, end_col, end_row)

    def get_range(self, range_spec: str) -> list[list[str]]:
        self.reads.append(range_spec)
        if self.fail_reads:
            raise RetrievalError(f"Could not read {range_spec}: simulated network error")
        c1, r1, c2, r2 = self._parse(range_spec)
        last = len(self.rows) if r2 is None else min(r2, len(self.rows))
        out: list[list[str]] = []
        for idx in range(r1, last + 1):
            cells = self.rows[idx - 1][c1 - 1 : c2]
            while cells and not cells[-1]:
                cells = cells[:-1]
            out.append(cells)
        while out and not out[-1]:
            out.pop()
        return out

    def update_range(self, range_spec: str, values: list[list[str]]) -> None:
        if self.fail_writes:
            raise PersistenceError(f"Could not write {range_spec}: simulated timeout")
        self.writes.append((range_spec, values))
        c1, r1, _, _ = self._parse(range_spec)
        for r_off, row_values in enumerate(values):
            idx = r1 + r_off
            while len(self.rows) < idx:
                self.rows.append([])
            row = self.rows[idx - 1]
            for c_off, value in enumerate(row_values):
                col = c1 + c_off
                while len(row) < col:
                    row.append("")
                row[col - 1] = value

    def cells(self, row_index: int) -> list[str]:
        row = list(self.rows[row_index - 1])
        return row + [""] * (3 - len(row))

    @staticmethod
    def _parse(range_spec: str) -> tuple[int, int, int, int | None]:
        match = _RANGE_RE.search(range_spec)
        assert match, f"unexpected range {range_spec}"
        end_row = int(match.group(4)) if match.group(4) else None
        return _col(match.group(1)), int(match.group(2)), _col(match.group(3)), end_row


HEADER = ["URL", "Status", "Comment"]


@pytest.fixture
def make_store():
    def _make(*data_rows: list[str]) -> FakeRowStore:
        return FakeRowStore([HEADER, *[list(r) for r in data_rows]])

    return _make
