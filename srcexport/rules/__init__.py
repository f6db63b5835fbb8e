"""SrcExport Rules System.

This module provides the entry filtering rules:
- FilterRule: Glob and regex filter rules with applicability flags
- GeneratedFileDetector: Designer and tool-generated file heuristics
- ExclusionResolver: Include/exclude decision for an entry
"""

from .patterns import ExpressionType, FilterRule, FilterType, compile_pattern
from .generated import GeneratedFileDetector, contains_generated_marker
from .engine import ExclusionResolver, relative_to_root

__all__ = [
    # Filter rules
    "ExpressionType",
    "FilterType",
    "FilterRule",
    "compile_pattern",
    # Generated files
    "GeneratedFileDetector",
    "contains_generated_marker",
    # Exclusion
    "ExclusionResolver",
    "relative_to_root",
]
