"""SrcExport Transforms - Content rewriting and project sanitizers.

This module provides content transformation capabilities:
- TextRewriter: Ordered literal replacements
- Base sanitizer classes and types
- Solution and installer project sanitizers (line based)
- MSBuild and legacy XML project sanitizers
- SanitizerRegistry: extension to sanitizer dispatch
"""

from .base import Sanitizer, SanitizerKind, SanitizerResult, TransformError
from .installer import InstallerProjectSanitizer
from .msbuild import LegacyXmlProjectSanitizer, XmlProjectSanitizer, read_project_reference
from .pipeline import EXTENSION_KINDS, SanitizerRegistry, kind_for_path
from .replacements import TextRewriter
from .solution import SolutionSanitizer

__all__ = [
    # Registry
    "EXTENSION_KINDS",
    "SanitizerRegistry",
    "kind_for_path",
    # Base classes
    "Sanitizer",
    "SanitizerKind",
    "SanitizerResult",
    "TransformError",
    # Text
    "TextRewriter",
    # Sanitizers
    "SolutionSanitizer",
    "InstallerProjectSanitizer",
    "XmlProjectSanitizer",
    "LegacyXmlProjectSanitizer",
    "read_project_reference",
]
