"""Top-level package for formatcleaner.

This package provides a configurable, deterministic text-normalization
pipeline for pasted Markdown and AI-assistant output. The main entry point is
`FormatCleaner`.
"""

from .config import CleanerSettings, SettingsLoader
from .pipeline import FormatCleaner

__all__ = ["CleanerSettings", "FormatCleaner", "SettingsLoader", "__version__"]

__version__ = "0.1.0"
