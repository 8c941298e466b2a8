from __future__ import annotations

import logging

from dcr_review.cursor import QueueCursor
from dcr_review.models import COMMENT_COL, STATUS_COL, Accept, Decision, Reject, ScanResult
from dcr_review.scanner import RowStoreProto, find_next_unresolved

_LOG = logging.getLogger(__name__)


class DecisionEngine:
    def __init__(self, store: RowStoreProto, cursor: QueueCursor) -> None:
        self._store = store
        self._cursor = cursor

    def resolve(self, current_row: int, decision: Decision) -> ScanResult:
        """Persist ``decision`` for ``current_row`` and locate the next unresolved row.

        The write is acknowledged before the follow-up scan is issued. A failed
        write (``PersistenceError``) or scan (``RetrievalError``) leaves the
        cursor where it was.
        """
        with self._cursor.held():
            self._write(current_row, decision)
            _LOG.info(
                "queue.decision.written row=%s status=%s",
                current_row,
                decision.status.value,
            )

            scan = find_next_unresolved(self._store, current_row)
            self._cursor.set(max(current_row, scan.cursor))
            return scan

    def _write(self, row: int, decision: Decision) -> None:
        if isinstance(decision, Reject):
            # Status and comment go in one call so a failure cannot tear them apart.
            self._store.update_range(
                self._store.range(STATUS_COL, row, COMMENT_COL, row),
                [[decision.status.value, decision.comment]],
            )
            return
        if isinstance(decision, Accept):
            self._store.update_range(
                self._store.range(STATUS_COL, row, STATUS_COL, row),
                [[decision.status.value]],
            )
            return
        raise TypeError(f"unsupported decision: {decision!r}")
