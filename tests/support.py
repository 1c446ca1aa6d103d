"""Test doubles shared across unit and integration tests."""

from __future__ import annotations


class RecordingNotifier:
    """Notifier that keeps messages for assertions."""

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)
