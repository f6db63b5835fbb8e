"""
SrcExport Foundation: Export errors.

Errors raised here abort an export run. Recoverable anomalies (malformed
project files, unresolvable hint paths) never surface as these.
"""
from srcexport.core.constants import ErrorCode


class ExportError(Exception):
    """Fatal export error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        """Initialize ExportError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class CopyVerificationError(ExportError):
    """Copied bytes kept differing from the source bytes."""

    def __init__(self, src: str, dst: str, attempts: int):
        self.src = src
        self.dst = dst
        self.attempts = attempts
        super().__init__(
            f'Error while copying file "{src}" to "{dst}" '
            f"({attempts} consecutive verification failures)",
            ErrorCode.VERIFICATION_FAILED,
        )
