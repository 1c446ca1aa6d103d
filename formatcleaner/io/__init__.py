"""Storage adapters for settings and documents."""

from .storage import SettingsStore, read_document, write_document

__all__ = ["SettingsStore", "read_document", "write_document"]
