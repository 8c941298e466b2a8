from __future__ import annotations


class ReviewQueueError(Exception):
    pass


class ConfigError(ReviewQueueError):
    pass


class RetrievalError(ReviewQueueError):
    pass


class PersistenceError(ReviewQueueError):
    pass


class DuplicateDecisionError(ReviewQueueError):
    def __init__(self, row_index: int, reason: str) -> None:
        super().__init__(f"row {row_index}: {reason}")
        self.row_index = row_index
        self.reason = reason


class FetchError(ReviewQueueError):
    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"failed to fetch {url}: {message}")
        self.url = url


class InvalidRequestError(ReviewQueueError):
    pass
