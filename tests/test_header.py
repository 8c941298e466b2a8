import pytest

from dcr_review.errors import ConfigError
from dcr_review.header import validate_header


@pytest.mark.parametrize(
    "header",
    [
        ["URL", "Status", "Comment"],
        ["URL", "Status", "Comment", "Reviewer", "Notes"],
    ],
)
def test_valid_header(header: list[str]) -> None:
    validate_header(header)


@pytest.mark.parametrize(
    "header",
    [
        ["url", "status", "comment"],
        ["Status", "URL", "Comment"],
        ["URL", "Comment", "Status"],
        ["URL", "Status"],
        [],
    ],
)
def test_invalid_header(header: list[str]) -> None:
    with pytest.raises(ConfigError):
        validate_header(header)
