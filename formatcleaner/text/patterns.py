"""Pattern compilation and ad-hoc pattern validation.

Responsibilities:
- Escape literal replacement rules into all-occurrence matchers.
- Compile the full rule snapshot once per settings change.
- Screen user-authored patterns with simple safety heuristics before use.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import re

from loguru import logger

from ..config import CleanerSettings
from ..errors import InvalidPatternError, PatternApplyError
from ..models.datatypes import CleanStats, CompiledPattern, ReplacementRule
from ..parsing import AI_SOURCE_CHATGPT, AI_SOURCE_CLAUDE, AI_SOURCE_NONE


_METACHARACTER_RE = re.compile(r"[.*+?^${}()|[\]\\]")
_MAX_PATTERN_LENGTH = 1000
_MAX_OPEN_PARENS = 50
_UNBOUNDED_WILDCARDS = ("(.*)", "(.+)")


def escape_literal(text: str) -> str:
    """Backslash-escape regex metacharacters so `text` matches only itself."""

    return _METACHARACTER_RE.sub(lambda match: "\\" + match.group(0), text)


def compile_rules(rules: Iterable[ReplacementRule]) -> tuple[CompiledPattern, ...]:
    """Compile rules in order, skipping rules whose match text is empty."""

    compiled: list[CompiledPattern] = []
    for position, rule in enumerate(rules):
        if not rule.is_active:
            logger.warning("Skipping replacement rule {} with empty `from` text.", position)
            continue
        compiled.append(
            CompiledPattern(
                pattern=re.compile(escape_literal(rule.from_text)),
                to_text=rule.to_text,
                source=rule,
            )
        )
    return tuple(compiled)


@dataclass(frozen=True, slots=True)
class PatternSet:
    """Compiled snapshot of every rule list in a settings object."""

    chatgpt: tuple[CompiledPattern, ...] = ()
    claude: tuple[CompiledPattern, ...] = ()
    custom: tuple[CompiledPattern, ...] = ()

    def for_source(self, source: str) -> tuple[CompiledPattern, ...]:
        """Return the compiled AI patterns selected by an AI source name."""

        if source == AI_SOURCE_NONE:
            return ()
        if source == AI_SOURCE_CHATGPT:
            return self.chatgpt
        if source == AI_SOURCE_CLAUDE:
            return self.claude
        raise ValueError(f"Unsupported AI source `{source}`.")

    @property
    def total(self) -> int:
        return len(self.chatgpt) + len(self.claude) + len(self.custom)


def compile_pattern_set(settings: CleanerSettings) -> PatternSet:
    """Compile all rule lists of `settings` into a new snapshot."""

    return PatternSet(
        chatgpt=compile_rules(settings.ai_patterns.chatgpt),
        claude=compile_rules(settings.ai_patterns.claude),
        custom=compile_rules(settings.custom_replacements),
    )


def is_safe_pattern(pattern: str) -> bool:
    """Return whether a raw user pattern passes the safety heuristics.

    A pattern is rejected when it does not compile, is longer than 1000
    characters, contains more than 50 `(` characters, or contains an
    unbounded capturing wildcard such as `(.*)` or `(.+)`.
    """

    try:
        re.compile(pattern)
    except re.error:
        return False
    if len(pattern) > _MAX_PATTERN_LENGTH:
        return False
    if pattern.count("(") > _MAX_OPEN_PARENS:
        return False
    return not any(wildcard in pattern for wildcard in _UNBOUNDED_WILDCARDS)


def apply_dynamic_pattern(
    text: str,
    pattern: str,
    replacement: str,
    stats: CleanStats | None = None,
) -> str:
    """Apply a user-authored regex to `text`, replacing every match.

    `replacement` is a regex template, so `\\1` and `\\g<name>` refer to groups.

    Raises:
        InvalidPatternError: If `pattern` fails `is_safe_pattern`.
        PatternApplyError: If matching or template expansion fails.
    """

    if not is_safe_pattern(pattern):
        raise InvalidPatternError(pattern)

    try:
        result, count = re.subn(pattern, replacement, text)
    except (re.error, IndexError) as exc:
        raise PatternApplyError(pattern, str(exc)) from exc

    if stats is not None:
        stats.record(count)
    return result
