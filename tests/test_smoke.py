"""Basic smoke tests for project wiring."""

from formatcleaner import FormatCleaner, __version__
from formatcleaner.config import CleanerSettings


def test_cleaner_can_be_instantiated_with_defaults() -> None:
    """Cleaner should compile bundled default rules on construction."""

    cleaner = FormatCleaner()
    assert cleaner.patterns.total == 9
    assert __version__


def test_settings_dataclass_defaults() -> None:
    """Settings should keep the bundled defaults."""

    settings = CleanerSettings()
    assert settings.remove_markdown is True
    assert settings.unify_list_marker is True
    assert settings.auto_format_headings is True
    assert settings.wechat_ready is False
    assert settings.default_ai_source == "none"
    assert [rule.from_text for rule in settings.custom_replacements] == ["**", "*", "_"]
