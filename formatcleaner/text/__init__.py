"""Text transformation components.

This package provides the pattern compiler, the literal replacement engine,
structural paragraph rules, and the heading formatter.
"""

from .cleaners import (
    BULLET,
    NormalizeHeadingSpacing,
    UnifyListMarker,
    WeChatSpacing,
    collapse_blank_lines,
)
from .headings import format_heading
from .patterns import (
    PatternSet,
    apply_dynamic_pattern,
    compile_pattern_set,
    compile_rules,
    escape_literal,
    is_safe_pattern,
)
from .replacement import apply_pattern, apply_patterns

__all__ = [
    "BULLET",
    "NormalizeHeadingSpacing",
    "PatternSet",
    "UnifyListMarker",
    "WeChatSpacing",
    "apply_dynamic_pattern",
    "apply_pattern",
    "apply_patterns",
    "collapse_blank_lines",
    "compile_pattern_set",
    "compile_rules",
    "escape_literal",
    "format_heading",
    "is_safe_pattern",
]
