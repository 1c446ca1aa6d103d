"""Shared typed data models for formatcleaner.

This package contains dataclasses used across modules to avoid cross-module
coupling and circular imports.
"""

from .datatypes import (
    CleanResult,
    CleanStats,
    CompiledPattern,
    ReplacementRule,
    RuleList,
)

__all__ = [
    "CleanResult",
    "CleanStats",
    "CompiledPattern",
    "ReplacementRule",
    "RuleList",
]
