"""Unit tests for structural paragraph rules."""

from __future__ import annotations

import pytest

from formatcleaner.text.cleaners import (
    NormalizeHeadingSpacing,
    UnifyListMarker,
    WeChatSpacing,
    collapse_blank_lines,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("- item", "• item"),
        ("* item", "• item"),
        ("-   spaced", "• spaced"),
        ("*item", "*item"),
        ("-item", "-item"),
        ("a - b", "a - b"),
        ("- a - b", "• a - b"),
    ],
)
def test_unify_list_marker_rewrites_only_line_start(text: str, expected: str) -> None:
    """Only a leading marker followed by whitespace should become a bullet."""

    assert UnifyListMarker().apply(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("#Title", "# Title"),
        ("###   Title", "### Title"),
        ("###### Six", "###### Six"),
        ("####### Title", "####### Title"),
        ("Not # heading", "Not # heading"),
    ],
)
def test_normalize_heading_spacing(text: str, expected: str) -> None:
    """Exactly one space should follow 1-6 leading hashes; longer runs are left alone."""

    assert NormalizeHeadingSpacing().apply(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("hello世界", "hello 世界"),
        ("世界hello", "世界 hello"),
        ("中 ，文", "中，文"),
        ("用Python写code", "用 Python 写 code"),
        ("第3章", "第 3 章"),
        ("好 。 ok", "好。ok"),
    ],
)
def test_wechat_spacing(text: str, expected: str) -> None:
    """WeChat rule should pad script boundaries and tighten full-width punctuation."""

    assert WeChatSpacing().apply(text) == expected


def test_collapse_blank_lines_limits_runs_to_two_newlines() -> None:
    """Runs of three or more newlines should collapse to a single blank line."""

    assert collapse_blank_lines("a\n\n\n\nb\n\nc\nd") == "a\n\nb\n\nc\nd"
