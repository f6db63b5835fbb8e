#!/usr/bin/env python3
"""Per-type sanitizer registry.

Maps lower-cased file extensions to the sanitizer kind that handles them
and builds the sanitizer instances of an export run.
"""

import os
from typing import Dict, Iterable, Optional

from srcexport.core.settings import ExportSettings
from srcexport.transforms.base import Sanitizer, SanitizerKind
from srcexport.transforms.installer import InstallerProjectSanitizer
from srcexport.transforms.msbuild import (
    CopyFileCallback,
    LegacyXmlProjectSanitizer,
    XmlProjectSanitizer,
)
from srcexport.transforms.solution import SolutionSanitizer

EXTENSION_KINDS: Dict[str, SanitizerKind] = {
    ".sln": SanitizerKind.SOLUTION,
    ".vdproj": SanitizerKind.INSTALLER_PROJECT,
    ".csproj": SanitizerKind.XML_PROJECT,
    ".vbproj": SanitizerKind.XML_PROJECT,
    ".dbproj": SanitizerKind.XML_PROJECT,
    ".vcxproj": SanitizerKind.XML_PROJECT,
    ".cfxproj": SanitizerKind.XML_PROJECT,
    ".wixproj": SanitizerKind.XML_PROJECT,
    ".vcproj": SanitizerKind.LEGACY_XML_PROJECT,
}


def kind_for_path(path: str) -> SanitizerKind:
    """Select the sanitizer kind for a file by its extension.

    Args:
        path: File path

    Returns:
        Sanitizer kind, GENERIC for unknown extensions
    """
    extension = os.path.splitext(path)[1].lower()
    return EXTENSION_KINDS.get(extension, SanitizerKind.GENERIC)


class SanitizerRegistry:
    """Sanitizers of one export run, keyed by kind."""

    def __init__(
        self,
        settings: ExportSettings,
        source_root: str,
        copy_file: Optional[CopyFileCallback] = None,
        special_folders: Optional[Iterable[str]] = None,
    ):
        """Initialize registry.

        Args:
            settings: Export settings of the current run
            source_root: Export source root
            copy_file: Callback used by XML projects to copy linked files
            special_folders: Override of the hint path special folders
        """
        self._sanitizers: Dict[SanitizerKind, Sanitizer] = {
            SanitizerKind.SOLUTION: SolutionSanitizer(settings),
            SanitizerKind.INSTALLER_PROJECT: InstallerProjectSanitizer(settings),
            SanitizerKind.XML_PROJECT: XmlProjectSanitizer(
                settings, source_root, copy_file, special_folders
            ),
            SanitizerKind.LEGACY_XML_PROJECT: LegacyXmlProjectSanitizer(settings),
        }

    def get(self, kind: SanitizerKind) -> Optional[Sanitizer]:
        """Get the sanitizer for a kind (None for GENERIC)."""
        return self._sanitizers.get(kind)

    def for_path(self, path: str) -> Optional[Sanitizer]:
        """Get the sanitizer handling a file, or None if it has none."""
        return self.get(kind_for_path(path))
