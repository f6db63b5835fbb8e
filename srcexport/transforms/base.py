#!/usr/bin/env python3
"""Base classes for build-project sanitizers.

This module provides the foundation for all sanitizers:
- Sanitizer abstract base class
- SanitizerResult for returning sanitized content
- TransformError for recoverable failures

Example:
    >>> class UppercaseSanitizer(Sanitizer):
    ...     def transform(self, content, path, metadata=None):
    ...         return content.upper()
    ...
    >>> result = UppercaseSanitizer(settings).apply(b"hello", "a.txt")
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from srcexport.core.errors import ExportError
from srcexport.core.settings import ExportSettings


class SanitizerKind(Enum):
    """Handler selected for a file, by extension."""

    SOLUTION = "solution"
    INSTALLER_PROJECT = "installer_project"
    XML_PROJECT = "xml_project"
    LEGACY_XML_PROJECT = "legacy_xml_project"
    GENERIC = "generic"


@dataclass
class SanitizerResult:
    """Result of a sanitizer run.

    On failure ``content`` holds the original input.
    """

    content: bytes
    success: bool = True
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    sanitizer_name: Optional[str] = None
    duration_ms: float = 0.0


class TransformError(Exception):
    """Recoverable error during sanitization."""

    def __init__(self, message: str, transform_name: Optional[str] = None):
        self.message = message
        self.transform_name = transform_name
        super().__init__(message)


class Sanitizer(ABC):
    """Abstract base class for build-project sanitizers.

    Subclasses implement transform(); apply() wraps it with timing and turns
    any failure except a fatal ExportError into an unsuccessful result.
    """

    kind: SanitizerKind = SanitizerKind.GENERIC

    def __init__(self, settings: ExportSettings, name: Optional[str] = None):
        """Initialize sanitizer.

        Args:
            settings: Export settings of the current run
            name: Optional name for this sanitizer
        """
        self.settings = settings
        self.name = name or self.__class__.__name__

    @abstractmethod
    def transform(
        self, content: bytes, path: str, metadata: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """Sanitize content.

        Args:
            content: Raw file content
            path: Source file path (for context)
            metadata: Optional metadata (source/destination paths)

        Returns:
            Sanitized content

        Raises:
            TransformError: If the content cannot be sanitized
        """

    def apply(
        self, content: bytes, path: str, metadata: Optional[Dict[str, Any]] = None
    ) -> SanitizerResult:
        """Apply the sanitizer with error handling and timing.

        Args:
            content: Raw file content
            path: Source file path
            metadata: Optional metadata

        Returns:
            SanitizerResult with sanitized or original content

        Raises:
            ExportError: Fatal errors raised while sanitizing are not recovered
        """
        start_time = time.time()

        try:
            sanitized = self.transform(content, path, metadata)
        except ExportError:
            raise
        except Exception as e:
            return SanitizerResult(
                content=content,
                success=False,
                error=f"{self.name}: {e}",
                sanitizer_name=self.name,
                duration_ms=(time.time() - start_time) * 1000,
            )

        return SanitizerResult(
            content=sanitized,
            success=True,
            metadata={"sanitizer": self.name, "changed": sanitized != content},
            sanitizer_name=self.name,
            duration_ms=(time.time() - start_time) * 1000,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name}>"


