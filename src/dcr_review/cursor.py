from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from dcr_review.models import HEADER_ROW


class QueueCursor:
    """Index of the last row known to be resolved.

    Only a scan-skip hint; the sheet stays authoritative. Callers hold
    ``held()`` across a whole read/decide/write cycle.
    """

    def __init__(self, initial: int = HEADER_ROW) -> None:
        self._value = initial
        self._lock = threading.RLock()

    def get(self) -> int:
        with self._lock:
            return self._value

    def set(self, row: int) -> None:
        with self._lock:
            self._value = row

    @contextmanager
    def held(self) -> Iterator[None]:
        with self._lock:
            yield
