from __future__ import annotations

import logging

from dcr_review.cursor import QueueCursor
from dcr_review.decisions import DecisionEngine
from dcr_review.errors import DuplicateDecisionError, InvalidRequestError
from dcr_review.models import COMMENT_COL, HEADER_ROW, URL_COL, Decision, QueueView, ScanResult
from dcr_review.scanner import RowStoreProto, find_next_unresolved, is_unresolved, row_from_cells

_LOG = logging.getLogger(__name__)


class ReviewQueue:
    """Serialises review cycles against one sheet.

    Built for a single reviewer; every cycle runs under the cursor lock so two
    tabs cannot interleave a scan with a write.
    """

    def __init__(
        self,
        store: RowStoreProto,
        cursor: QueueCursor | None = None,
        *,
        reject_duplicates: bool = True,
    ) -> None:
        self._store = store
        self.cursor = cursor or QueueCursor()
        self._engine = DecisionEngine(store, self.cursor)
        self._reject_duplicates = reject_duplicates

    def current(self) -> QueueView:
        with self.cursor.held():
            return self._view(self._scan())

    def decide(
        self,
        decision: Decision,
        *,
        row_index: int | None = None,
        expected_url: str | None = None,
    ) -> QueueView:
        with self.cursor.held():
            if row_index is None:
                scan = self._scan()
                if scan.row is None:
                    _LOG.warning("queue.decide.nothing_pending cursor=%s", self.cursor.get())
                    return QueueView(row=None)
                row_index = scan.row.row_index
                expected_url = expected_url or scan.row.url
            elif row_index <= HEADER_ROW:
                raise InvalidRequestError(f"row {row_index} is not a data row")

            if self._reject_duplicates:
                self._ensure_pending(row_index, expected_url)

            return self._view(self._engine.resolve(row_index, decision))

    def _scan(self) -> ScanResult:
        scan = find_next_unresolved(self._store, self.cursor.get())
        if scan.found:
            self.cursor.set(scan.cursor)
        return scan

    def _ensure_pending(self, row_index: int, expected_url: str | None) -> None:
        rows = self._store.get_range(self._store.range(URL_COL, row_index, COMMENT_COL, row_index))
        cells = rows[0] if rows else []
        if not is_unresolved(cells):
            row = row_from_cells(row_index, cells)
            _LOG.warning(
                "queue.decide.duplicate row=%s status=%s",
                row_index,
                row.status or "<empty>",
            )
            raise DuplicateDecisionError(
                row_index,
                f"already resolved as {row.status!r}" if row.status else "no pending item at this row",
            )
        url = cells[0].strip()
        if expected_url and url != expected_url.strip():
            raise DuplicateDecisionError(row_index, f"row now holds {url!r}, not {expected_url!r}")

    @staticmethod
    def _view(scan: ScanResult) -> QueueView:
        return QueueView(row=scan.row if scan.found else None)
