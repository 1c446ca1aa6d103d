"""Domain exceptions for pattern handling, persistence, and CLI diagnostics."""

from __future__ import annotations

from pathlib import Path


class FormatCleanerError(RuntimeError):
    """Base class for all formatcleaner failures."""


class InvalidPatternError(FormatCleanerError):
    """Raised when a user-authored pattern fails the safety heuristics."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"Invalid pattern: {pattern}")
        self.pattern = pattern


class PatternApplyError(FormatCleanerError):
    """Raised when the regex engine fails while matching or substituting."""

    def __init__(self, pattern: str, detail: str) -> None:
        super().__init__(f"Failed to apply pattern `{pattern}`: {detail}")
        self.pattern = pattern
        self.detail = detail


class PersistenceError(FormatCleanerError):
    """Raised when settings cannot be loaded from or saved to storage."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"Settings storage `{path}`: {detail}")
        self.path = path
        self.detail = detail


class CleanerStageError(FormatCleanerError):
    """Raised when a specific command stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
