"""Settings and document storage.

Responsibilities:
- Persist `CleanerSettings` as a versionless JSON blob merged over defaults.
- Read and write UTF-8 text documents for the command-line host.
"""

from __future__ import annotations

import json
from pathlib import Path

from ..config import CleanerSettings, SettingsLoader
from ..errors import PersistenceError


class SettingsStore:
    """Filesystem-backed settings persistence."""

    def __init__(self, path: Path) -> None:
        """Initialize the store with the settings file path."""

        self.path = path

    def exists(self) -> bool:
        """Return whether a settings file has been written."""

        return self.path.exists()

    def load(self) -> CleanerSettings:
        """Load settings, returning defaults when no file exists yet."""

        if not self.path.exists():
            return SettingsLoader.defaults()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(self.path, f"could not be read: {exc}") from exc
        if not isinstance(payload, dict):
            raise PersistenceError(self.path, "must contain a JSON object.")
        try:
            return SettingsLoader.from_mapping(payload, source_label=f"Settings `{self.path}`")
        except ValueError as exc:
            raise PersistenceError(self.path, str(exc)) from exc

    def save(self, settings: CleanerSettings) -> Path:
        """Save settings and return the written path."""

        settings.validate()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(
                    SettingsLoader.to_mapping(settings),
                    ensure_ascii=False,
                    indent=2,
                    sort_keys=True,
                ),
                encoding="utf-8",
            )
        except OSError as exc:
            raise PersistenceError(self.path, f"could not be written: {exc}") from exc
        return self.path


def read_document(path: Path) -> str:
    """Load document text with its line endings untranslated."""

    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def write_document(path: Path, text: str) -> Path:
    """Save document text verbatim and return the final path."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="")
    return path
