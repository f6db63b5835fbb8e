"""SrcExport - Clean source tree export.

Copies a source tree while filtering build output, rewriting text and
stripping source-control bindings from build projects.
"""

from srcexport.core.constants import SRCEXPORT_VERSION

__version__ = SRCEXPORT_VERSION
