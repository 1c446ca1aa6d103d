"""Structural paragraph transforms.

Responsibilities:
- Provide the list-marker, heading-spacing, and WeChat spacing rules applied
  to one trimmed paragraph after the replacement rules.
- Keep every rule a pure `str -> str` transform.
"""

from __future__ import annotations

import re
from typing import Protocol


BULLET = "•"


class ParagraphRule(Protocol):
    """Protocol for single-paragraph transforms."""

    def apply(self, text: str) -> str:
        """Apply a single structural transformation."""


class UnifyListMarker:
    """Rewrite a leading `-` or `*` list marker to a bullet."""

    _MARKER_RE = re.compile(r"^[-*]\s+")

    def apply(self, text: str) -> str:
        """Replace the line-start marker and its whitespace with `• `."""

        return self._MARKER_RE.sub(f"{BULLET} ", text, count=1)


class NormalizeHeadingSpacing:
    """Ensure exactly one space follows a run of 1-6 leading `#` characters."""

    _HEADING_RE = re.compile(r"^(#{1,6})(?!#)\s*")

    def apply(self, text: str) -> str:
        """Normalize heading marker spacing; 7+ `#` runs are left untouched."""

        if not text.startswith("#"):
            return text
        return self._HEADING_RE.sub(r"\1 ", text, count=1)


class WeChatSpacing:
    """Normalize CJK punctuation and CJK/Latin spacing for WeChat publishing."""

    _PUNCTUATION_RE = re.compile(r"\s*([，。！？；：、])\s*")
    _LATIN_THEN_CJK_RE = re.compile(r"([a-zA-Z0-9])([\u4e00-\u9fa5])")
    _CJK_THEN_LATIN_RE = re.compile(r"([\u4e00-\u9fa5])([a-zA-Z0-9])")

    def apply(self, text: str) -> str:
        """Strip spaces around full-width punctuation and pad script boundaries."""

        text = self._PUNCTUATION_RE.sub(r"\1", text)
        text = self._LATIN_THEN_CJK_RE.sub(r"\1 \2", text)
        return self._CJK_THEN_LATIN_RE.sub(r"\1 \2", text)


_BLANK_RUN_RE = re.compile(r"\n{3,}")


def collapse_blank_lines(text: str) -> str:
    """Collapse three or more consecutive newlines to exactly two."""

    return _BLANK_RUN_RE.sub("\n\n", text)
