"""Core datatypes shared across formatcleaner modules.

Responsibilities:
- Represent replacement rules and their compiled form.
- Provide an ordered rule container with stable-order mutation.
- Carry per-invocation cleaning statistics and results.

Key types:
- `ReplacementRule`, `RuleList`, `CompiledPattern`, `CleanStats`, `CleanResult`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import re


@dataclass(frozen=True, slots=True)
class ReplacementRule:
    """A literal text replacement.

    Attributes:
        from_text: Exact substring to find; never interpreted as a pattern.
        to_text: Literal replacement text.
    """

    from_text: str
    to_text: str = ""

    @property
    def is_active(self) -> bool:
        """Return whether the rule can match anything."""

        return bool(self.from_text)


class RuleList:
    """Ordered sequence of replacement rules.

    Rules apply in list order, each rule's output feeding the next, so
    insertion and removal keep the relative order of all other rules.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[ReplacementRule] = ()) -> None:
        self._rules: list[ReplacementRule] = list(rules)

    def insert(self, index: int, rule: ReplacementRule) -> None:
        """Insert a rule before `index`, rejecting rules with empty match text."""

        self._require_active(rule)
        self._rules.insert(index, rule)

    def append(self, rule: ReplacementRule) -> None:
        """Add a rule at the end of the list."""

        self._require_active(rule)
        self._rules.append(rule)

    def remove_at(self, index: int) -> ReplacementRule:
        """Remove and return the rule at `index`."""

        if not -len(self._rules) <= index < len(self._rules):
            raise IndexError(f"Rule index {index} is out of range (0..{len(self._rules) - 1}).")
        return self._rules.pop(index)

    def copy(self) -> RuleList:
        return RuleList(self._rules)

    def __iter__(self) -> Iterator[ReplacementRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, index: int) -> ReplacementRule:
        return self._rules[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RuleList):
            return self._rules == other._rules
        return NotImplemented

    def __repr__(self) -> str:
        return f"RuleList({self._rules!r})"

    @staticmethod
    def _require_active(rule: ReplacementRule) -> None:
        if not rule.is_active:
            raise ValueError("Replacement rule `from` text must not be empty.")


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A rule compiled into an all-occurrences literal matcher.

    Attributes:
        pattern: Compiled, escaped regular expression.
        to_text: Literal replacement text.
        source: Rule the pattern was compiled from.
    """

    pattern: re.Pattern[str]
    to_text: str
    source: ReplacementRule


@dataclass(slots=True)
class CleanStats:
    """Mutable counters accumulated during a single `clean` call."""

    replacements: int = 0

    def record(self, count: int) -> None:
        """Add a non-negative match count."""

        self.replacements += max(0, int(count))


@dataclass(frozen=True, slots=True)
class CleanResult:
    """Output of the paragraph pipeline."""

    result: str
    stats: CleanStats = field(default_factory=CleanStats)
