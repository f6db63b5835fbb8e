#!/usr/bin/env python3
"""Heuristic detection of designer and tool-generated source files.

A file is considered generated when its name looks like designer or
generated output (``*.designer.*``, ``*.g.*``) or when one of its lines
carries a well-known generated-code banner.
"""

import os
from typing import Optional

from srcexport.core.constants import GENERATED_CODE_MARKERS
from srcexport.core.encoding import decode_text
from srcexport.rules.patterns import FilterRule, FilterType

DESIGNER_FILTER = FilterRule(
    "*.designer.*",
    FilterType.EXCLUDE,
    apply_to_file_name=True,
    apply_to_path=False,
    apply_to_directory=False,
    apply_to_file=True,
)

GENERATED_FILTER = FilterRule(
    "*.g.*",
    FilterType.EXCLUDE,
    apply_to_file_name=True,
    apply_to_path=False,
    apply_to_directory=False,
    apply_to_file=True,
)

_MARKERS = tuple(marker.casefold() for marker in GENERATED_CODE_MARKERS)


class GeneratedFileDetector:
    """Flags designer/generated files by name or by content banner."""

    def __init__(self, source_root: Optional[str] = None):
        """Initialize detector.

        Args:
            source_root: Export root used to compute relative paths
        """
        self._source_root = source_root

    def is_generated(self, path: str, relative_path: Optional[str] = None) -> bool:
        """Check whether a file looks generated.

        Args:
            path: File path
            relative_path: Path relative to the export root (computed if omitted)

        Returns:
            True if the file is a designer or generated file
        """
        if not os.path.isfile(path):
            return False

        if relative_path is None:
            relative_path = self._relative_path(path)
        name = os.path.basename(path)

        if DESIGNER_FILTER.matches(path, relative_path, name):
            return True

        if GENERATED_FILTER.matches(path, relative_path, name):
            return True

        return contains_generated_marker(path)

    def _relative_path(self, path: str) -> str:
        if self._source_root is None:
            return path
        return os.path.relpath(path, self._source_root)


def contains_generated_marker(path: str) -> bool:
    """Scan a file line by line for a generated-code banner.

    Args:
        path: File path

    Returns:
        True as soon as a marker is found, False for unreadable files
    """
    try:
        with open(path, "rb") as f:
            content = f.read()
    except OSError:
        return False

    text, _ = decode_text(content)
    for line in text.splitlines():
        folded = line.casefold()
        if any(marker in folded for marker in _MARKERS):
            return True
    return False
