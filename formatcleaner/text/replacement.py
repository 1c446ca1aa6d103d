"""Ordered application of compiled literal patterns."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import re

from ..errors import PatternApplyError
from ..models.datatypes import CleanStats, CompiledPattern


def apply_pattern(line: str, compiled: CompiledPattern, stats: CleanStats) -> str:
    """Replace every match of one compiled pattern and count the matches.

    Raises:
        PatternApplyError: If the regex engine fails; `line` and `stats` are untouched.
    """

    to_text = compiled.to_text
    try:
        result, count = compiled.pattern.subn(lambda _match: to_text, line)
    except (re.error, RecursionError) as exc:
        raise PatternApplyError(compiled.source.from_text, str(exc)) from exc
    stats.record(count)
    return result


def apply_patterns(
    line: str,
    patterns: Iterable[CompiledPattern],
    stats: CleanStats,
    on_error: Callable[[PatternApplyError], None] | None = None,
) -> str:
    """Apply each pattern in order to the already-rewritten line.

    Later patterns see the output of earlier ones. When `on_error` is given, a
    failing pattern is reported to it and skipped; otherwise the error propagates.
    """

    current = line
    for compiled in patterns:
        try:
            current = apply_pattern(current, compiled, stats)
        except PatternApplyError as exc:
            if on_error is None:
                raise
            on_error(exc)
    return current
