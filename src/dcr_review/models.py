from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

HEADER = ("URL", "Status", "Comment")
HEADER_ROW = 1
URL_COL = 1
STATUS_COL = 2
COMMENT_COL = 3


class Status(StrEnum):
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


@dataclass(frozen=True, slots=True)
class Row:
    row_index: int
    url: str
    status: str = ""
    comment: str = ""


@dataclass(frozen=True, slots=True)
class Accept:
    status: ClassVar[Status] = Status.ACCEPTED


@dataclass(frozen=True, slots=True)
class Reject:
    comment: str
    status: ClassVar[Status] = Status.REJECTED

    def __post_init__(self) -> None:
        if not self.comment.strip():
            raise ValueError("reject requires a non-empty comment")


Decision = Accept | Reject


def decision_from_comment(comment: str | None) -> Decision:
    """A missing or empty comment accepts; anything else rejects with the text as given.

    Raises ``ValueError`` for a whitespace-only comment.
    """
    if not comment:
        return Accept()
    return Reject(comment=comment)


@dataclass(frozen=True, slots=True)
class ScanResult:
    found: bool
    row: Row | None
    cursor: int


@dataclass(frozen=True, slots=True)
class QueueView:
    row: Row | None

    @property
    def empty(self) -> bool:
        return self.row is None


@dataclass(frozen=True, slots=True)
class LatestItem:
    web_url: str
    api_url: str


@dataclass(frozen=True, slots=True)
class FetchedContent:
    body: bytes
    content_type: str | None = None
