"""Paragraph cleaning pipeline for formatcleaner.

Responsibilities:
- Hold the settings snapshot and its compiled patterns together.
- Run the fixed-order per-paragraph transforms and rejoin the document.
- Recover locally from pattern failures and report them to the host.

Key types:
- `FormatCleaner`: host-facing facade exposing `clean`, `format_heading`,
  `recompile_patterns`, and `apply_custom_pattern`.
"""

from __future__ import annotations

from loguru import logger

from . import notifications
from .config import CleanerSettings, SettingsLoader
from .errors import InvalidPatternError, PatternApplyError
from .models.datatypes import CleanResult, CleanStats
from .notifications import LogNotifier, Notifier
from .parsing import AI_SOURCE_NONE
from .telemetry.logger import RunLogger
from .text.cleaners import (
    NormalizeHeadingSpacing,
    UnifyListMarker,
    WeChatSpacing,
    collapse_blank_lines,
)
from .text.headings import format_heading
from .text.patterns import PatternSet, apply_dynamic_pattern, compile_pattern_set
from .text.replacement import apply_patterns


class FormatCleaner:
    """Clean documents paragraph by paragraph according to user settings."""

    LARGE_DOCUMENT_PARAGRAPHS = 500
    PARAGRAPH_SEPARATOR = "\n\n"

    def __init__(
        self,
        settings: CleanerSettings | None = None,
        notifier: Notifier | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Compile patterns for `settings` (defaults when omitted)."""

        self._notifier: Notifier = notifier or LogNotifier()
        self._run_logger = run_logger
        self._list_rule = UnifyListMarker()
        self._heading_rule = NormalizeHeadingSpacing()
        self._wechat_rule = WeChatSpacing()
        self._settings = SettingsLoader.defaults()
        self._patterns = PatternSet()
        self.recompile_patterns(settings if settings is not None else SettingsLoader.defaults())

    @property
    def settings(self) -> CleanerSettings:
        """Copy of the settings snapshot the current patterns were compiled from.

        Edits to the returned object take effect only through `recompile_patterns`.
        """

        return SettingsLoader.copy(self._settings)

    @property
    def patterns(self) -> PatternSet:
        return self._patterns

    def recompile_patterns(self, settings: CleanerSettings) -> None:
        """Compile all rule lists, then swap settings and patterns in together.

        The previous snapshot stays active if validation or compilation fails.
        """

        self._on_stage_start("compile")
        try:
            settings.validate()
            snapshot = SettingsLoader.copy(settings)
            patterns = compile_pattern_set(snapshot)
        except Exception as exc:
            self._on_stage_failure("compile", exc)
            raise
        self._settings, self._patterns = snapshot, patterns
        self._on_stage_complete("compile", patterns=patterns.total)

    def clean(self, text: str) -> CleanResult:
        """Clean `text` and return the result with the replacement count."""

        paragraphs = text.split("\n")
        stats = CleanStats()
        self._on_stage_start("clean", paragraphs=len(paragraphs))
        if len(paragraphs) > self.LARGE_DOCUMENT_PARAGRAPHS:
            self._notifier.info(notifications.PROCESSING_LARGE_DOCUMENT)

        cleaned = [self._clean_paragraph(paragraph, stats) for paragraph in paragraphs]
        result = self.PARAGRAPH_SEPARATOR.join(paragraph for paragraph in cleaned if paragraph)
        if self._settings.wechat_ready:
            result = collapse_blank_lines(result.strip())

        self._on_stage_complete("clean", replacements=stats.replacements)
        return CleanResult(result=result, stats=stats)

    def format_heading(self, text: str, level: int) -> str:
        """Rewrite the leading heading marker of a line or selection."""

        return format_heading(text, level)

    def apply_custom_pattern(
        self,
        text: str,
        pattern: str,
        replacement: str,
        stats: CleanStats | None = None,
    ) -> str:
        """Apply a user-authored regex, returning `text` unchanged on any failure."""

        self._on_stage_start("pattern")
        try:
            result = apply_dynamic_pattern(text, pattern, replacement, stats)
        except InvalidPatternError as exc:
            self._on_stage_failure("pattern", exc)
            self._notifier.error(notifications.invalid_pattern(pattern))
            return text
        except PatternApplyError as exc:
            logger.warning("Error applying pattern: {}", exc.detail)
            self._on_stage_failure("pattern", exc)
            self._notifier.error(notifications.failed_to_apply_pattern(pattern))
            return text
        self._on_stage_complete("pattern")
        return result

    def _clean_paragraph(self, paragraph: str, stats: CleanStats) -> str:
        """Apply the fixed-order transforms to one trimmed paragraph."""

        settings = self._settings
        cleaned = paragraph.strip()

        if settings.default_ai_source != AI_SOURCE_NONE:
            cleaned = apply_patterns(
                cleaned,
                self._patterns.for_source(settings.default_ai_source),
                stats,
                on_error=self._report_rule_failure,
            )
        if settings.remove_markdown:
            cleaned = apply_patterns(
                cleaned,
                self._patterns.custom,
                stats,
                on_error=self._report_rule_failure,
            )
        if settings.unify_list_marker:
            cleaned = self._list_rule.apply(cleaned)
        if settings.auto_format_headings:
            cleaned = self._heading_rule.apply(cleaned)
        if settings.wechat_ready:
            cleaned = self._wechat_rule.apply(cleaned)
        return cleaned

    def _report_rule_failure(self, exc: PatternApplyError) -> None:
        logger.warning("Skipping replacement rule `{}`: {}", exc.pattern, exc.detail)
        self._notifier.error(notifications.failed_to_apply_pattern(exc.pattern))

    def _on_stage_start(self, stage: str, **context: object) -> None:
        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage, **context)

    def _on_stage_complete(self, stage: str, **context: object) -> None:
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage, **context)

    def _on_stage_failure(self, stage: str, exc: Exception) -> None:
        if self._run_logger is not None:
            self._run_logger.log_stage_failure(stage, type(exc).__name__)
