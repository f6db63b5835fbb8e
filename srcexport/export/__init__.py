"""SrcExport Export - Tree walking and file copying.

This module runs an export:
- Exporter: Walks, filters and copies a source tree
- SourceWalker: Filtered recursive enumeration
- VerifiedCopier: Byte copies with digest verification
- ContentSniffer: Text/binary detection
- LinkCapability: Symbolic link inspection and creation
"""

from srcexport.core.errors import CopyVerificationError, ExportError

from .copier import VerifiedCopier, digest_file
from .exporter import Exporter, ExportResult
from .links import LinkCapability, LinkKind, OsLinkCapability
from .sniffer import ContentSniffer
from .traversal import SourceWalker

__all__ = [
    "Exporter",
    "ExportResult",
    "ExportError",
    "CopyVerificationError",
    "SourceWalker",
    "VerifiedCopier",
    "digest_file",
    "ContentSniffer",
    "LinkCapability",
    "LinkKind",
    "OsLinkCapability",
]
