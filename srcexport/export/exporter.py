#!/usr/bin/env python3
"""Export orchestrator.

Walks the source tree, rewrites relative paths, recreates symbolic links
and dispatches every file to the copy strategy matching its type.

Example:
    >>> exporter = Exporter("/src/solution", default_settings(), logger)
    >>> result = exporter.export("/out/solution")
    >>> result.files
    42
"""

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

from srcexport.core.settings import ExportSettings
from srcexport.export.copier import (
    VerifiedCopier,
    ensure_parent_directory,
    path_delete,
    set_read_only,
)
from srcexport.export.links import LinkCapability, LinkKind, OsLinkCapability
from srcexport.export.sniffer import ContentSniffer
from srcexport.export.traversal import SourceWalker
from srcexport.infrastructure.config_manager import ConfigError
from srcexport.infrastructure.logger import LogCategory, Logger
from srcexport.rules.engine import ExclusionResolver, relative_to_root
from srcexport.transforms.base import Sanitizer
from srcexport.transforms.pipeline import SanitizerRegistry
from srcexport.transforms.replacements import TextRewriter


@dataclass
class ExportResult:
    """Counts of exported entries."""

    directories: int = 0
    files: int = 0

    def summary(self) -> List[str]:
        return [f"Directories: {self.directories}", f"Files: {self.files}"]


class Exporter:
    """Exports a source tree into a destination directory."""

    def __init__(
        self,
        source_path: Optional[str],
        settings: Optional[ExportSettings],
        logger: Optional[Logger] = None,
        links: Optional[LinkCapability] = None,
        sniffer: Optional[ContentSniffer] = None,
        copier: Optional[VerifiedCopier] = None,
        special_folders: Optional[Iterable[str]] = None,
    ):
        """Initialize exporter.

        Args:
            source_path: Source directory (a file selects its directory)
            settings: Export settings
            logger: Event sink (console logger when omitted)
            links: Symbolic link capability
            sniffer: Text/binary sniffer for files without a sanitizer
            copier: Copy primitive (owns the run's failure counter)
            special_folders: Override of the hint path special folders

        Raises:
            ConfigError: If source_path or settings is missing
        """
        if source_path is None:
            raise ConfigError("Source path is required")
        if settings is None:
            raise ConfigError("Export settings are required")

        source_path = os.path.abspath(source_path)
        if not os.path.isdir(source_path):
            source_path = os.path.dirname(source_path)

        self.source_path = source_path
        self.settings = settings
        self.logger = logger or Logger()
        self.links = links or OsLinkCapability()
        self.sniffer = sniffer or ContentSniffer()
        self.copier = copier or VerifiedCopier(settings.compute_hash, self.logger)
        self.rewriter = TextRewriter(settings.replacements)
        self.resolver = ExclusionResolver(settings, source_path)
        self.walker = SourceWalker(self.resolver, settings, self.logger, self.links)
        self.sanitizers = SanitizerRegistry(
            settings, source_path, self.copy_file, special_folders
        )

    def export(self, destination: str) -> ExportResult:
        """Export the source tree.

        Args:
            destination: Destination directory (created if missing)

        Returns:
            Counts of exported directories and files

        Raises:
            CopyVerificationError: If copies keep failing verification
            OSError: If the destination cannot be written
        """
        result = ExportResult()

        for line in self.settings.trace():
            self.logger.event(LogCategory.CONFIGURATION, line)

        if not os.path.isdir(destination):
            self.logger.event(LogCategory.CREATE_DIRECTORY, destination)
            os.makedirs(destination, exist_ok=True)

        keep_links = self.settings.keep_symbolic_links
        for src in self.walker.walk(self.source_path):
            relative_path = self.rewriter.apply(relative_to_root(src, self.source_path))
            dst = os.path.join(destination, relative_path)
            is_link = keep_links and self.links.is_symbolic_link(src)

            if os.path.isdir(src):
                result.directories += 1
                if is_link:
                    self._recreate_link(src, dst, LinkKind.DIRECTORY)
                else:
                    os.makedirs(dst, exist_ok=True)
            else:
                result.files += 1
                if is_link:
                    self._recreate_link(src, dst, LinkKind.FILE)
                else:
                    self.copy_file(src, dst)

        return result

    def _recreate_link(self, src: str, dst: str, kind: LinkKind) -> None:
        target = self.links.resolve_link_target(src)

        if os.path.lexists(dst):
            replaceable = os.path.islink(dst) or not os.path.isdir(dst)
            if not (self.settings.override_existing_file and replaceable):
                self.logger.warning("Destination exists, link not recreated", path=dst)
                return
            os.unlink(dst)

        self.links.create_link(dst, target, kind)

    def copy_file(self, src: str, dst: str) -> None:
        """Copy one file with the strategy matching its type.

        Args:
            src: Source file
            dst: Destination file

        Raises:
            CopyVerificationError: If copies keep failing verification
        """
        settings = self.settings
        self.logger.event(LogCategory.COPY, src)

        ensure_parent_directory(dst)

        if settings.override_existing_file:
            path_delete(dst, settings.unprotect_file)

        if not settings.can_replace_text and not settings.rewrites_projects:
            self.copier.copy_binary(src, dst)
        else:
            sanitizer = self.sanitizers.for_path(src)
            if sanitizer is not None:
                self._copy_sanitized(sanitizer, src, dst)
            elif settings.can_replace_text and self.sniffer.is_probably_text(src):
                self._write_rewritten(src, dst)
            else:
                self.copier.copy_binary(src, dst)

        if settings.output_read_only is not None:
            set_read_only(dst, settings.output_read_only)

    def _copy_sanitized(self, sanitizer: Sanitizer, src: str, dst: str) -> None:
        with open(src, "rb") as f:
            content = f.read()

        result = sanitizer.apply(
            content, src, {"source_path": src, "destination_path": dst}
        )
        if not result.success:
            self.logger.event(LogCategory.ERROR, f"Invalid project file: {src}", error=result.error)
            self.copier.copy_binary(src, dst)
            return

        self._write_rewritten(src, dst, result.content)

    def _write_rewritten(self, src: str, dst: str, content: Optional[bytes] = None) -> None:
        """Write text through the rewriter, or copy src verbatim if it cannot be re-encoded."""
        try:
            if content is None:
                self.copier.copy_text(src, dst, self.rewriter)
            else:
                self.copier.write_text(content, dst, self.rewriter)
        except UnicodeError as e:
            self.logger.event(LogCategory.ERROR, f"Cannot encode rewritten text: {src}", error=e)
            self.copier.copy_binary(src, dst)
