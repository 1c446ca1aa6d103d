"""Unit tests for the heading formatter."""

from __future__ import annotations

import pytest

from formatcleaner.text.headings import format_heading


@pytest.mark.parametrize(
    ("text", "level", "expected"),
    [
        ("## Old", 1, "# Old"),
        ("NoHeading", 3, "### NoHeading"),
        ("#Tight", 2, "## Tight"),
        ("####   Spaced", 2, "## Spaced"),
        ("Deep", 8, "######## Deep"),
        ("# first\n# second", 2, "## first\n# second"),
    ],
)
def test_format_heading_replaces_leading_marker(text: str, level: int, expected: str) -> None:
    """Formatter should strip one leading marker run and prepend the requested level."""

    assert format_heading(text, level) == expected


@pytest.mark.parametrize("level", [0, -1])
def test_format_heading_rejects_non_positive_levels(level: int) -> None:
    """Levels must be positive integers."""

    with pytest.raises(ValueError, match="positive integer"):
        format_heading("Title", level)
