"""SrcExport Core - Shared definitions.

Import specific names from submodules:
    from srcexport.core import constants
    from srcexport.core import encoding
    from srcexport.core import errors
    from srcexport.core import settings
    from srcexport.core import validators
"""

# Re-export main module references for convenience
from srcexport.core import constants, encoding, errors, settings, validators

__all__ = [
    "constants",
    "encoding",
    "errors",
    "settings",
    "validators",
]
