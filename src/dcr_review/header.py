from __future__ import annotations

from collections.abc import Sequence

from dcr_review.errors import ConfigError
from dcr_review.models import HEADER


def validate_header(header: Sequence[str]) -> None:
    """Fail fast unless the sheet starts with exactly URL, Status, Comment.

    Comparison is case-sensitive and positional; trailing columns are ignored.
    """
    found = [str(cell) for cell in header[: len(HEADER)]]
    if found != list(HEADER):
        raise ConfigError(
            f"Sheet header must start with {list(HEADER)}, found {list(header)}. "
            "Fix the header row before starting the review queue."
        )
