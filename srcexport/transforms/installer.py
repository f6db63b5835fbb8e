#!/usr/bin/env python3
"""Installer project (``.vdproj``) sanitizer.

Drops the quoted source-control keys from the installer project when
binding removal is enabled.
"""

from typing import Any, Dict, Optional

from srcexport.core.constants import SOURCE_CONTROL_KEYS
from srcexport.core.encoding import decode_text, encode_text
from srcexport.transforms.base import Sanitizer, SanitizerKind

_QUOTED_KEYS = tuple(f'"{key}"' for key in SOURCE_CONTROL_KEYS)


class InstallerProjectSanitizer(Sanitizer):
    """Line-oriented sanitizer for installer projects."""

    kind = SanitizerKind.INSTALLER_PROJECT

    def transform(
        self, content: bytes, path: str, metadata: Optional[Dict[str, Any]] = None
    ) -> bytes:
        if not self.settings.remove_source_control_binding:
            return content

        text, encoding = decode_text(content)
        kept = [
            line
            for line in text.splitlines(keepends=True)
            if not line.strip().startswith(_QUOTED_KEYS)
        ]
        return encode_text("".join(kept), encoding)
