from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from dcr_review.models import COMMENT_COL, URL_COL, Row, ScanResult

_LOG = logging.getLogger(__name__)


class RowStoreProto(Protocol):
    def range(self, start_col: int, start_row: int, end_col: int, end_row: int | None = None) -> str: ...
    def get_range(self, range_spec: str) -> list[list[str]]: ...
    def update_range(self, range_spec: str, values: list[list[str]]) -> None: ...


def _trim(cells: Sequence[str]) -> list[str]:
    out = [str(cell) for cell in cells]
    while out and not out[-1].strip():
        out.pop()
    return out


def is_unresolved(cells: Sequence[str]) -> bool:
    """True when only the URL cell is populated."""
    trimmed = _trim(cells)
    return len(trimmed) == URL_COL and bool(trimmed[0].strip())


def row_from_cells(row_index: int, cells: Sequence[str]) -> Row:
    padded = [str(cell) for cell in cells] + [""] * (COMMENT_COL - len(cells))
    return Row(
        row_index=row_index,
        url=padded[0].strip(),
        status=padded[1].strip(),
        comment=padded[2],
    )


def find_next_unresolved(store: RowStoreProto, start_row: int) -> ScanResult:
    """Return the first unresolved row after ``start_row``.

    Reads ``start_row + 1`` to the end of the sheet in one call. Raises
    whatever the store raises (``RetrievalError`` for the sheets adapter).
    """
    first = start_row + 1
    rows = store.get_range(store.range(URL_COL, first, COMMENT_COL))
    for row_index, cells in enumerate(rows, start=first):
        if not is_unresolved(cells):
            continue
        row = row_from_cells(row_index, cells)
        _LOG.info("queue.scan.found start=%s row=%s url=%s", start_row, row_index, row.url)
        return ScanResult(found=True, row=row, cursor=row_index - 1)

    _LOG.info("queue.scan.empty start=%s scanned=%s", start_row, len(rows))
    return ScanResult(found=False, row=None, cursor=start_row)
