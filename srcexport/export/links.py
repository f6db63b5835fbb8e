#!/usr/bin/env python3
"""Symbolic link capability.

The export pipeline never touches links directly: it asks a
LinkCapability, so tests and platforms without link support can provide
their own.
"""

import os
from abc import ABC, abstractmethod
from enum import Enum


class LinkKind(Enum):
    """Kind of link to create."""

    FILE = "file"
    DIRECTORY = "directory"


class LinkCapability(ABC):
    """Interface for inspecting and creating symbolic links."""

    @abstractmethod
    def is_symbolic_link(self, path: str) -> bool:
        """Check whether path is a symbolic link."""

    @abstractmethod
    def resolve_link_target(self, path: str) -> str:
        """Read the target a symbolic link points to, as stored in the link."""

    @abstractmethod
    def create_link(self, path: str, target: str, kind: LinkKind) -> None:
        """Create a symbolic link at path pointing to target."""


class OsLinkCapability(LinkCapability):
    """Symbolic links backed by the os module."""

    def is_symbolic_link(self, path: str) -> bool:
        return os.path.islink(path)

    def resolve_link_target(self, path: str) -> str:
        return os.readlink(path)

    def create_link(self, path: str, target: str, kind: LinkKind) -> None:
        """Create a symbolic link, creating missing parent directories.

        Raises:
            OSError: If the link cannot be created
        """
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        os.symlink(target, path, target_is_directory=kind == LinkKind.DIRECTORY)
