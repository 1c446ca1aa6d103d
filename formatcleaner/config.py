"""Settings model and loaders for formatcleaner.

Responsibilities:
- Define cleaning settings as a typed dataclass with bundled defaults.
- Merge persisted or file-based payloads over defaults, tolerating unknown keys.
- Apply runtime overrides with deterministic precedence.

Key types:
- `CleanerSettings`: toggles and rule lists read by the paragraph pipeline.
- `AIPatterns`: per-AI-source rule bundles.
- `SettingsLoader`: static construction and serialization helpers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

from loguru import logger
import yaml

from .models.datatypes import ReplacementRule, RuleList
from .parsing import (
    AI_SOURCE_CHATGPT,
    AI_SOURCE_CLAUDE,
    AI_SOURCE_NONE,
    SUPPORTED_AI_SOURCES,
    normalize_optional_string,
    parse_ai_source,
    parse_required_flag,
)


_DEFAULT_CUSTOM_REPLACEMENTS = (
    ReplacementRule("**", ""),
    ReplacementRule("*", ""),
    ReplacementRule("_", ""),
)
_DEFAULT_CHATGPT_PATTERNS = (
    ReplacementRule("Sure, here's an example:", ""),
    ReplacementRule("Of course!", ""),
    ReplacementRule("Here you go:", ""),
)
_DEFAULT_CLAUDE_PATTERNS = (
    ReplacementRule("Here's", ""),
    ReplacementRule("Certainly!", ""),
    ReplacementRule("I'd be happy to help.", ""),
)


@dataclass(slots=True)
class AIPatterns:
    """Rule bundles keyed by AI source.

    Attributes:
        chatgpt: Rules stripping ChatGPT boilerplate.
        claude: Rules stripping Claude boilerplate.
    """

    chatgpt: RuleList = field(default_factory=lambda: RuleList(_DEFAULT_CHATGPT_PATTERNS))
    claude: RuleList = field(default_factory=lambda: RuleList(_DEFAULT_CLAUDE_PATTERNS))

    def rules_for(self, source: str) -> RuleList:
        """Return the rule list for an AI source name."""

        if source == AI_SOURCE_CHATGPT:
            return self.chatgpt
        if source == AI_SOURCE_CLAUDE:
            return self.claude
        raise ValueError(f"No rule bundle for AI source `{source}`.")


@dataclass(slots=True)
class CleanerSettings:
    """User settings read by the paragraph pipeline.

    Attributes:
        remove_markdown: Apply the custom replacement rules.
        unify_list_marker: Rewrite leading `-`/`*` list markers to a bullet.
        auto_format_headings: Normalize spacing after leading `#` runs.
        wechat_ready: Apply CJK/Latin spacing and punctuation cleanup.
        default_ai_source: `none`, `chatgpt`, or `claude`.
        custom_replacements: Ordered literal replacement rules.
        ai_patterns: Ordered rule bundles per AI source.
    """

    remove_markdown: bool = True
    unify_list_marker: bool = True
    auto_format_headings: bool = True
    wechat_ready: bool = False
    default_ai_source: str = AI_SOURCE_NONE
    custom_replacements: RuleList = field(
        default_factory=lambda: RuleList(_DEFAULT_CUSTOM_REPLACEMENTS)
    )
    ai_patterns: AIPatterns = field(default_factory=AIPatterns)

    def validate(self) -> None:
        """Validate setting values before patterns are compiled."""

        if self.default_ai_source not in SUPPORTED_AI_SOURCES:
            supported = ", ".join(sorted(SUPPORTED_AI_SOURCES))
            raise ValueError(
                f"Unsupported `default_ai_source` value `{self.default_ai_source}`; "
                f"supported: {supported}."
            )

    def rule_list(self, name: str) -> RuleList:
        """Return a rule list by its CLI-facing name (`custom`, `chatgpt`, `claude`)."""

        if name == "custom":
            return self.custom_replacements
        return self.ai_patterns.rules_for(name)


class SettingsLoader:
    """Factory methods for creating `CleanerSettings` from external sources."""

    _FLAG_KEYS = ("remove_markdown", "unify_list_marker", "auto_format_headings", "wechat_ready")
    # camelCase names used by the editor plugin's persisted data blob.
    _KEY_ALIASES = {
        "removeMarkdown": "remove_markdown",
        "unifyListMarker": "unify_list_marker",
        "autoFormatHeadings": "auto_format_headings",
        "wechatReady": "wechat_ready",
        "defaultAISource": "default_ai_source",
        "customReplacements": "custom_replacements",
        "aiPatterns": "ai_patterns",
    }
    _SUPPORTED_KEYS = frozenset(
        {*_FLAG_KEYS, "default_ai_source", "custom_replacements", "ai_patterns"}
    )
    _ENV_KEYS = {
        "remove_markdown": "FORMATCLEANER_REMOVE_MARKDOWN",
        "unify_list_marker": "FORMATCLEANER_UNIFY_LIST_MARKER",
        "auto_format_headings": "FORMATCLEANER_AUTO_FORMAT_HEADINGS",
        "wechat_ready": "FORMATCLEANER_WECHAT_READY",
        "default_ai_source": "FORMATCLEANER_AI_SOURCE",
    }

    @staticmethod
    def defaults() -> CleanerSettings:
        """Return a fresh settings object populated with bundled defaults."""

        return CleanerSettings()

    @staticmethod
    def from_yaml(path: Path) -> CleanerSettings:
        """Create validated settings from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return SettingsLoader.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_mapping(
        payload: Mapping[str, Any], source_label: str = "settings"
    ) -> CleanerSettings:
        """Merge a payload over defaults and return validated settings.

        Missing keys keep their defaults; unknown keys are ignored with a warning.
        """

        normalized = SettingsLoader._normalize_keys(payload, source_label)
        settings = SettingsLoader.defaults()

        for key in SettingsLoader._FLAG_KEYS:
            if key in normalized:
                setattr(
                    settings,
                    key,
                    SettingsLoader._flag(normalized[key], key, source_label),
                )
        if "default_ai_source" in normalized:
            try:
                settings.default_ai_source = parse_ai_source(normalized["default_ai_source"])
            except ValueError as exc:
                raise ValueError(f"{source_label}: {exc}") from exc
        if "custom_replacements" in normalized:
            settings.custom_replacements = SettingsLoader._rule_list(
                normalized["custom_replacements"], "custom_replacements", source_label
            )
        if "ai_patterns" in normalized:
            settings.ai_patterns = SettingsLoader._ai_patterns(
                normalized["ai_patterns"], source_label
            )

        settings.validate()
        return settings

    @staticmethod
    def with_overrides(
        settings: CleanerSettings,
        cli: Mapping[str, object] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CleanerSettings:
        """Return a copy of `settings` with runtime overrides applied.

        Precedence for each key is `cli` > `env` > the given settings value.
        `None` CLI values mean "not provided".
        """

        cli_values = {key: value for key, value in (cli or {}).items() if value is not None}
        env_map: Mapping[str, str] = os.environ if env is None else env
        resolved = SettingsLoader.copy(settings)

        for key, env_key in SettingsLoader._ENV_KEYS.items():
            if key in cli_values:
                raw_value: object = cli_values[key]
                label = "CLI"
            elif normalize_optional_string(env_map.get(env_key)) is not None:
                raw_value = env_map[env_key]
                label = f"environment `{env_key}`"
            else:
                continue

            if key == "default_ai_source":
                try:
                    resolved.default_ai_source = parse_ai_source(raw_value)
                except ValueError as exc:
                    raise ValueError(f"{label}: {exc}") from exc
            else:
                setattr(resolved, key, SettingsLoader._flag(raw_value, key, label))

        resolved.validate()
        return resolved

    @staticmethod
    def copy(settings: CleanerSettings) -> CleanerSettings:
        """Return a deep-enough copy so rule list edits do not leak between copies."""

        return CleanerSettings(
            remove_markdown=settings.remove_markdown,
            unify_list_marker=settings.unify_list_marker,
            auto_format_headings=settings.auto_format_headings,
            wechat_ready=settings.wechat_ready,
            default_ai_source=settings.default_ai_source,
            custom_replacements=settings.custom_replacements.copy(),
            ai_patterns=AIPatterns(
                chatgpt=settings.ai_patterns.chatgpt.copy(),
                claude=settings.ai_patterns.claude.copy(),
            ),
        )

    @staticmethod
    def to_mapping(settings: CleanerSettings) -> dict[str, object]:
        """Serialize settings to the persisted camelCase payload shape."""

        def _rules(rules: RuleList) -> list[dict[str, str]]:
            return [{"from": rule.from_text, "to": rule.to_text} for rule in rules]

        return {
            "removeMarkdown": settings.remove_markdown,
            "unifyListMarker": settings.unify_list_marker,
            "autoFormatHeadings": settings.auto_format_headings,
            "wechatReady": settings.wechat_ready,
            "defaultAISource": settings.default_ai_source,
            "customReplacements": _rules(settings.custom_replacements),
            "aiPatterns": {
                "chatgpt": _rules(settings.ai_patterns.chatgpt),
                "claude": _rules(settings.ai_patterns.claude),
            },
        }

    @staticmethod
    def _normalize_keys(payload: Mapping[str, Any], source_label: str) -> dict[str, Any]:
        """Map aliased keys to canonical names and drop unsupported ones."""

        normalized: dict[str, Any] = {}
        ignored: list[str] = []
        for raw_key, value in payload.items():
            key = SettingsLoader._KEY_ALIASES.get(str(raw_key), str(raw_key))
            if key not in SettingsLoader._SUPPORTED_KEYS:
                ignored.append(str(raw_key))
                continue
            normalized[key] = value
        if ignored:
            logger.warning(
                "{} includes unsupported key(s), ignored: {}",
                source_label,
                ", ".join(sorted(ignored)),
            )
        return normalized

    @staticmethod
    def _flag(value: object, key: str, source_label: str) -> bool:
        try:
            return parse_required_flag(value, key)
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

    @staticmethod
    def _rule_list(raw: object, key: str, source_label: str) -> RuleList:
        """Read an ordered rule list of `{from, to}` mappings."""

        if raw is None:
            return RuleList()
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
            raise ValueError(f"{source_label} field `{key}` must be a list of rules.")

        rules: list[ReplacementRule] = []
        for position, item in enumerate(raw):
            if not isinstance(item, Mapping):
                raise ValueError(
                    f"{source_label} field `{key}` item {position} must be a mapping "
                    "with `from` and `to`."
                )
            from_text = item.get("from", "")
            to_text = item.get("to", "")
            if not isinstance(from_text, str) or not isinstance(to_text, (str, type(None))):
                raise ValueError(
                    f"{source_label} field `{key}` item {position} must use string values."
                )
            rules.append(ReplacementRule(from_text, to_text or ""))
        return RuleList(rules)

    @staticmethod
    def _ai_patterns(raw: object, source_label: str) -> AIPatterns:
        """Read AI rule bundles, defaulting any missing source."""

        if raw is None:
            return AIPatterns()
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `ai_patterns` must be a mapping/object.")

        patterns = AIPatterns()
        for source in (AI_SOURCE_CHATGPT, AI_SOURCE_CLAUDE):
            if source in raw:
                setattr(
                    patterns,
                    source,
                    SettingsLoader._rule_list(raw[source], f"ai_patterns.{source}", source_label),
                )
        unknown = sorted(str(key) for key in raw if key not in (AI_SOURCE_CHATGPT, AI_SOURCE_CLAUDE))
        if unknown:
            logger.warning(
                "{} field `ai_patterns` includes unknown source(s), ignored: {}",
                source_label,
                ", ".join(unknown),
            )
        return patterns
