"""Unit tests for ordered literal replacement."""

from __future__ import annotations

import re

import pytest

from formatcleaner.errors import PatternApplyError
from formatcleaner.models.datatypes import CleanStats, CompiledPattern, ReplacementRule
from formatcleaner.text.patterns import compile_rules
from formatcleaner.text.replacement import apply_pattern, apply_patterns


class _FailingPattern:
    """Stand-in compiled pattern whose substitution always fails."""

    def subn(self, repl: object, string: str) -> tuple[str, int]:
        raise re.error("simulated engine failure")


def _failing_compiled(from_text: str) -> CompiledPattern:
    return CompiledPattern(
        pattern=_FailingPattern(),  # type: ignore[arg-type]
        to_text="",
        source=ReplacementRule(from_text, ""),
    )


def test_apply_patterns_counts_every_match_in_sequence() -> None:
    """Each rule should see the previous rule's output and add its own match count."""

    patterns = compile_rules(
        [ReplacementRule("**", ""), ReplacementRule("*", ""), ReplacementRule("_", "")]
    )
    stats = CleanStats()

    result = apply_patterns("**bold** and *it* _u_", patterns, stats)

    assert result == "bold and it u"
    assert stats.replacements == 6


def test_apply_patterns_is_case_sensitive_without_word_boundaries() -> None:
    """Matching should be exact-substring and case-sensitive."""

    patterns = compile_rules([ReplacementRule("cat", "dog")])
    stats = CleanStats()

    result = apply_patterns("Cat concatenate cat", patterns, stats)

    assert result == "Cat condogenate dog"
    assert stats.replacements == 2


def test_apply_patterns_inserts_replacement_text_literally() -> None:
    """Backslashes and group syntax in `to` text should never be interpreted."""

    patterns = compile_rules([ReplacementRule("x", r"\1\g<0>$&")])
    stats = CleanStats()

    assert apply_patterns("axb", patterns, stats) == r"a\1\g<0>$&b"
    assert stats.replacements == 1


def test_apply_patterns_output_feeds_later_rules() -> None:
    """A later rule should match text produced by an earlier rule."""

    patterns = compile_rules([ReplacementRule("a", "b"), ReplacementRule("b", "c")])
    stats = CleanStats()

    assert apply_patterns("ab", patterns, stats) == "cc"
    assert stats.replacements == 3


def test_apply_pattern_raises_without_touching_stats() -> None:
    """Engine failures should be wrapped and leave counters unchanged."""

    stats = CleanStats()

    with pytest.raises(PatternApplyError):
        apply_pattern("line", _failing_compiled("boom"), stats)

    assert stats.replacements == 0


def test_apply_patterns_skips_failing_rule_when_handler_given() -> None:
    """A failing rule should be reported and skipped while later rules still run."""

    reported: list[str] = []
    patterns = (_failing_compiled("boom"), *compile_rules([ReplacementRule("b", "B")]))
    stats = CleanStats()

    result = apply_patterns(
        "abc", patterns, stats, on_error=lambda exc: reported.append(exc.pattern)
    )

    assert result == "aBc"
    assert stats.replacements == 1
    assert reported == ["boom"]
