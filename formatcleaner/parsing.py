"""Shared parsing helpers for settings payloads and runtime overrides."""

from __future__ import annotations


_TRUE_FLAG_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_FLAG_TOKENS = frozenset({"0", "false", "no", "off"})

AI_SOURCE_NONE = "none"
AI_SOURCE_CHATGPT = "chatgpt"
AI_SOURCE_CLAUDE = "claude"
SUPPORTED_AI_SOURCES = frozenset({AI_SOURCE_NONE, AI_SOURCE_CHATGPT, AI_SOURCE_CLAUDE})


def normalize_optional_string(value: object) -> str | None:
    """Return a stripped string, or `None` when the value is missing or blank."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_flag(value: object) -> bool | None:
    """Parse a permissive boolean token; `None` means the token was not recognized."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value) if value in (0, 1) else None

    token = normalize_optional_string(value)
    if token is None:
        return None
    token = token.lower()
    if token in _TRUE_FLAG_TOKENS:
        return True
    if token in _FALSE_FLAG_TOKENS:
        return False
    return None


def parse_required_flag(value: object, field_name: str) -> bool:
    """Parse a boolean token or raise an actionable `ValueError`.

    Args:
        value: Raw value from a payload, environment variable, or CLI option.
        field_name: Field name used in the error message.

    Raises:
        ValueError: If the token is not one of the accepted boolean values.
    """

    parsed = parse_flag(value)
    if parsed is None:
        raise ValueError(
            f"`{field_name}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
        )
    return parsed


def parse_ai_source(value: object, field_name: str = "default_ai_source") -> str:
    """Normalize an AI source name and validate it against the supported set."""

    token = normalize_optional_string(value)
    if token is None:
        return AI_SOURCE_NONE
    token = token.lower()
    if token not in SUPPORTED_AI_SOURCES:
        supported = ", ".join(sorted(SUPPORTED_AI_SOURCES))
        raise ValueError(f"Unsupported `{field_name}` value `{token}`; supported: {supported}.")
    return token


def parse_line_range(value: str) -> tuple[int, int]:
    """Parse a 1-based inclusive line range such as `3`, `3-7`, or `3:7`."""

    token = normalize_optional_string(value)
    if token is None:
        raise ValueError("Line range must not be empty.")

    separator = next((char for char in ("-", ":") if char in token), None)
    try:
        if separator is None:
            start = end = int(token)
        else:
            raw_start, raw_end = token.split(separator, 1)
            start, end = int(raw_start), int(raw_end)
    except ValueError as exc:
        raise ValueError(f"Invalid line range `{token}`; expected `N` or `N-M`.") from exc

    if start < 1 or end < start:
        raise ValueError(f"Invalid line range `{token}`; lines are 1-based and ascending.")
    return start, end
