#!/usr/bin/env python3
"""Exclusion decisions for filesystem entries.

Include rules are a whitelist that overrides every exclude rule. Entries
that no rule matches are kept, unless generated-file exclusion is on and
the entry looks generated.

Example:
    >>> resolver = ExclusionResolver(settings, "/src")
    >>> resolver.must_exclude("/src/app/bin")
    True
"""

import os
from typing import TYPE_CHECKING, List, Optional

from srcexport.rules.generated import GeneratedFileDetector
from srcexport.rules.patterns import FilterRule, FilterType

if TYPE_CHECKING:
    from srcexport.core.settings import ExportSettings


def relative_to_root(path: str, root: str) -> str:
    """Strip the export root from a path.

    Paths outside the root are returned unchanged.

    Args:
        path: Entry path
        root: Export root

    Returns:
        Root-relative path
    """
    prefix = root.rstrip(os.sep)
    if path.startswith(prefix + os.sep):
        return path[len(prefix) + 1:]
    return path


class ExclusionResolver:
    """Decides whether an entry is left out of the export."""

    def __init__(
        self,
        settings: "ExportSettings",
        source_root: str,
        detector: Optional[GeneratedFileDetector] = None,
    ):
        """Initialize resolver.

        Args:
            settings: Export settings holding the filter rules
            source_root: Export root, used to compute relative paths
            detector: Generated-file detector (created when omitted)
        """
        self.settings = settings
        self.source_root = source_root
        self.detector = detector or GeneratedFileDetector(source_root)

    def _enabled_rules(self, filter_type: FilterType) -> List[FilterRule]:
        return [
            rule
            for rule in self.settings.filters
            if rule.enabled and rule.filter_type == filter_type
        ]

    def must_exclude(self, path: str) -> bool:
        """Check whether an entry must be excluded.

        Args:
            path: Entry path below the export root

        Returns:
            True if the entry is excluded
        """
        if not self.settings.filters:
            return False

        relative_path = relative_to_root(path, self.source_root)
        name = os.path.basename(path.rstrip(os.sep))

        for rule in self._enabled_rules(FilterType.INCLUDE):
            if rule.matches(path, relative_path, name):
                return False

        for rule in self._enabled_rules(FilterType.EXCLUDE):
            if rule.matches(path, relative_path, name):
                return True

        return self.settings.exclude_generated_files and self.detector.is_generated(
            path, relative_path
        )
