"""
Exception hierarchy for the end-to-end starter.

Cache misses are not errors and never raise; only conditions the suite cannot
recover from (unwritable session file, missing configuration) end up here.
"""

from typing import Any, Dict, Optional


class E2EStarterError(Exception):
    """Base exception for test-suite infrastructure errors."""
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error': type(self).__name__,
            'message': self.message,
            'context': self.context,
        }


class SessionStateFormatError(E2EStarterError):
    """Raised when a persisted session state does not match the storage-state schema."""
    pass


class SessionCaptureError(E2EStarterError):
    """Raised when a captured session state cannot be written to disk."""
    pass


class MissingEnvironmentError(E2EStarterError):
    """Raised when required environment variables are missing or blank."""
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            f"Missing required environment variables: {', '.join(self.missing)}. "
            f"Please check your .env file.",
            context={'missing': self.missing},
        )
