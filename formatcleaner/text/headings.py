"""Heading marker rewriting for a single line or selection."""

from __future__ import annotations

import re


_LEADING_MARKER_RE = re.compile(r"^#+\s*")


def format_heading(text: str, level: int) -> str:
    """Replace any leading `#` run in `text` with a level-`level` heading marker."""

    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise ValueError(f"Heading level must be a positive integer, got {level!r}.")
    return "#" * level + " " + _LEADING_MARKER_RE.sub("", text, count=1)
