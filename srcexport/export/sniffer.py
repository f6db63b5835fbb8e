#!/usr/bin/env python3
"""Text/binary sniffing for files without a dedicated sanitizer.

The MIME type guessed from the file name decides first; files with an
unknown or ambiguous type are sniffed from their first bytes.
"""

import codecs
import mimetypes
import os
from typing import Optional

from srcexport.core.constants import Limits

# application/* types that hold text
TEXT_APPLICATION_TYPES = frozenset(
    {
        "application/json",
        "application/javascript",
        "application/x-javascript",
        "application/xml",
        "application/xhtml+xml",
        "application/x-sh",
        "application/x-csh",
        "application/x-tex",
        "application/x-latex",
        "application/x-python-code",
        "application/sql",
        "application/rtf",
    }
)

BINARY_MAIN_TYPES = frozenset({"image", "audio", "video", "font"})

_TEXT_BOMS = (
    codecs.BOM_UTF8,
    codecs.BOM_UTF32_LE,
    codecs.BOM_UTF32_BE,
    codecs.BOM_UTF16_LE,
    codecs.BOM_UTF16_BE,
)


class ContentSniffer:
    """Decides whether a file is probably text."""

    def __init__(self, sniff_bytes: int = Limits.SNIFF_BYTES):
        """Initialize sniffer.

        Args:
            sniff_bytes: Number of leading bytes inspected
        """
        self.sniff_bytes = sniff_bytes

    def guess_type(self, path: str) -> Optional[bool]:
        """Classify a file by its name.

        Returns:
            True for text types, False for binary types, None when unknown
        """
        mime_type, encoding = mimetypes.guess_type(os.path.basename(path))
        if not mime_type or encoding:
            return None

        main_type = mime_type.split("/")[0]
        if main_type == "text" or mime_type in TEXT_APPLICATION_TYPES:
            return True
        if main_type in BINARY_MAIN_TYPES:
            return False
        return None

    def is_probably_text(self, path: str) -> bool:
        """Check whether a file is probably text.

        Args:
            path: File path

        Returns:
            True if the file looks like text
        """
        guessed = self.guess_type(path)
        if guessed is not None:
            return guessed

        try:
            with open(path, "rb") as f:
                chunk = f.read(self.sniff_bytes)
        except OSError:
            return False

        return looks_like_text(chunk)


def looks_like_text(chunk: bytes) -> bool:
    """Check leading bytes of a file for text content.

    A byte order mark means text; otherwise the bytes must be NUL-free and
    decode as UTF-8 (a multi-byte sequence cut at the end is tolerated).
    """
    if chunk.startswith(_TEXT_BOMS):
        return True

    if b"\x00" in chunk:
        return False

    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(chunk, final=False)
    except UnicodeDecodeError:
        return False
    return True
