"""Unit tests for rule containers and statistics records."""

from __future__ import annotations

import pytest

from formatcleaner.models.datatypes import CleanStats, ReplacementRule, RuleList


def test_rule_list_insert_and_remove_keep_relative_order() -> None:
    """Insertions and removals should not reorder the remaining rules."""

    rules = RuleList([ReplacementRule("a"), ReplacementRule("c")])

    rules.insert(1, ReplacementRule("b"))
    rules.append(ReplacementRule("d"))
    removed = rules.remove_at(0)

    assert removed == ReplacementRule("a")
    assert [rule.from_text for rule in rules] == ["b", "c", "d"]
    assert rules[-1].from_text == "d"
    assert len(rules) == 3


def test_rule_list_rejects_empty_from_text() -> None:
    """Rules with empty match text would match everywhere and must be rejected."""

    rules = RuleList()

    with pytest.raises(ValueError, match="must not be empty"):
        rules.append(ReplacementRule("", "x"))
    with pytest.raises(ValueError, match="must not be empty"):
        rules.insert(0, ReplacementRule(""))
    assert len(rules) == 0


def test_rule_list_remove_at_rejects_out_of_range_index() -> None:
    """Removing a missing index should raise a descriptive `IndexError`."""

    rules = RuleList([ReplacementRule("a")])

    with pytest.raises(IndexError, match="out of range"):
        rules.remove_at(3)


def test_clean_stats_ignores_negative_counts() -> None:
    """Replacement counters should never decrease."""

    stats = CleanStats()
    stats.record(2)
    stats.record(-5)

    assert stats.replacements == 2
