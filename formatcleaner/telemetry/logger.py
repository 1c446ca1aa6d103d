"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic stage-level runtime logs through `loguru`.
- Keep log lines free of document text and user patterns.
"""

from __future__ import annotations

import re
import sys
from typing import TextIO

from loguru import logger


_UNSAFE_TOKEN_CHARS = re.compile(r"[^\w\-.:/]")


def _format_context(context: dict[str, object]) -> str:
    """Render ` key=value` pairs sorted by key, with unsafe characters replaced by `_`."""

    pairs = []
    for key in sorted(context):
        token = _UNSAFE_TOKEN_CHARS.sub("_", str(context[key]).strip()) or "none"
        pairs.append(f" {key}={token}")
    return "".join(pairs)


class RunLogger:
    """Emit deterministic stage logs for cleaner activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Route loguru output to `sink` (stderr by default) with bare formatting."""

        self._sink = sink or sys.stderr
        logger.remove()
        logger.add(self._sink, format="{message}", level=level, colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Write one `[phase]` line; context keys are sorted so runs diff cleanly."""

        line = f"[phase] level={level} stage={stage} event={event}{_format_context(context)}"
        logger.log(level, line)

    def log_stage_start(self, stage: str, **context: object) -> None:
        """Emit a stage-start runtime event."""

        self._emit("INFO", "start", stage, **context)

    def log_stage_complete(self, stage: str, **context: object) -> None:
        """Emit a stage-complete runtime event."""

        self._emit("INFO", "complete", stage, **context)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure runtime event without sensitive payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type)
