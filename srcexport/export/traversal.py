#!/usr/bin/env python3
"""Recursive enumeration of the entries to export.

Each directory level yields its files first, then its subdirectories,
each followed by its own contents. Entries are visited in sorted name
order and every decision is reported as an INCLUDE or EXCLUDE event.
"""

import os
from typing import Iterator, List, Optional, Set, Tuple

from srcexport.core.settings import ExportSettings
from srcexport.export.links import LinkCapability, OsLinkCapability
from srcexport.infrastructure.logger import LogCategory, Logger
from srcexport.rules.engine import ExclusionResolver


class SourceWalker:
    """Lazy, filtered walk of a source tree."""

    def __init__(
        self,
        resolver: ExclusionResolver,
        settings: ExportSettings,
        logger: Logger,
        links: Optional[LinkCapability] = None,
    ):
        """Initialize walker.

        Args:
            resolver: Exclusion decisions
            settings: Export settings (symbolic link handling)
            logger: Event sink
            links: Symbolic link capability
        """
        self.resolver = resolver
        self.settings = settings
        self.logger = logger
        self.links = links or OsLinkCapability()

    def walk(self, root: str) -> Iterator[str]:
        """Yield every included entry below root.

        Args:
            root: Directory to walk

        Yields:
            Paths of included files and directories
        """
        if not os.path.isdir(root):
            return
        yield from self._walk(root, {os.path.realpath(root)})

    def _walk(self, directory: str, ancestors: Set[str]) -> Iterator[str]:
        files, directories = self._list(directory)

        for path in files:
            if self._included(path):
                yield path

        for path in directories:
            if not self._included(path):
                continue
            yield path

            if self.settings.keep_symbolic_links and self.links.is_symbolic_link(path):
                continue

            real_path = os.path.realpath(path)
            if real_path in ancestors:
                self.logger.warning("Skipping directory cycle", path=path)
                continue

            yield from self._walk(path, ancestors | {real_path})

    def _list(self, directory: str) -> Tuple[List[str], List[str]]:
        files = []
        directories = []
        for name in sorted(os.listdir(directory)):
            path = os.path.join(directory, name)
            if os.path.isdir(path):
                directories.append(path)
            elif os.path.isfile(path):
                files.append(path)
            elif self.settings.keep_symbolic_links and os.path.islink(path):
                # dangling link, recreated as is
                files.append(path)
        return files, directories

    def _included(self, path: str) -> bool:
        if self.resolver.must_exclude(path):
            self.logger.event(LogCategory.EXCLUDE, path)
            return False
        self.logger.event(LogCategory.INCLUDE, path)
        return True
