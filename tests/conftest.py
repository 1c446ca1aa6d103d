"""Shared pytest fixtures for the formatcleaner test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from formatcleaner.config import CleanerSettings
from formatcleaner.models.datatypes import ReplacementRule, RuleList
from tests.support import RecordingNotifier


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Provide a fresh recording notifier."""

    return RecordingNotifier()


@pytest.fixture
def make_settings() -> Callable[..., CleanerSettings]:
    """Build settings with every transform disabled unless explicitly enabled."""

    def _make(
        *,
        custom: list[tuple[str, str]] | None = None,
        **overrides: object,
    ) -> CleanerSettings:
        values: dict[str, object] = {
            "remove_markdown": False,
            "unify_list_marker": False,
            "auto_format_headings": False,
            "wechat_ready": False,
            "default_ai_source": "none",
        }
        values.update(overrides)
        settings = CleanerSettings(**values)  # type: ignore[arg-type]
        if custom is not None:
            settings.custom_replacements = RuleList(
                ReplacementRule(from_text, to_text) for from_text, to_text in custom
            )
        return settings

    return _make


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient `FORMATCLEANER_*` variables from leaking into settings resolution."""

    for key in (
        "FORMATCLEANER_REMOVE_MARKDOWN",
        "FORMATCLEANER_UNIFY_LIST_MARKER",
        "FORMATCLEANER_AUTO_FORMAT_HEADINGS",
        "FORMATCLEANER_WECHAT_READY",
        "FORMATCLEANER_AI_SOURCE",
    ):
        monkeypatch.delenv(key, raising=False)
