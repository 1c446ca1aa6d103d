"""User-visible transient notifications.

Responsibilities:
- Define the notification channel the cleaner reports through.
- Centralize user-facing message text.

Key types:
- `Notifier`: protocol implemented by hosts.
- `LogNotifier`: default notifier writing through `loguru`.
"""

from __future__ import annotations

from typing import Protocol

from loguru import logger


class Notifier(Protocol):
    """Host channel for short informational and error messages."""

    def info(self, message: str) -> None:
        """Show an informational message."""

    def error(self, message: str) -> None:
        """Show an error message."""


class LogNotifier:
    """Notifier that forwards messages to the application log."""

    def info(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


PROCESSING_LARGE_DOCUMENT = "Processing large document..."


def format_cleaned(count: int) -> str:
    return f"Format cleaned! Made {count} replacements."


def selection_cleaned(count: int) -> str:
    return f"Selection cleaned! Made {count} replacements."


def invalid_pattern(pattern: str) -> str:
    return f"Invalid pattern: {pattern}"


def failed_to_apply_pattern(pattern: str) -> str:
    return f"Failed to apply pattern: {pattern}"
