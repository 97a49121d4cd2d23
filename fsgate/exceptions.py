"""
Custom exceptions for the application.
"""

from enum import Enum
from typing import Optional


class BaseAppError(Exception):
    """Base exception class for application errors."""

    pass


class FileErrorKind(Enum):
    """Closed set of failure classes reported by the file manager."""

    INVALID_PATH = "invalid path"
    IS_DIRECTORY = "is a directory"
    NOT_DIRECTORY = "not a directory"
    NOT_FOUND = "file not found"


class FileManagerError(BaseAppError):
    """
    Exception raised by file manager operations.

    The ``kind`` is the stable classification callers should branch on. For
    ``INVALID_PATH`` the message never says which check failed.
    """

    def __init__(self, kind: FileErrorKind, path: Optional[str] = None):
        self.kind = kind
        self.path = path
        super().__init__(kind.value)


class PathValidationError(BaseAppError):
    """Detailed path validation failure, kept for diagnostics only."""

    def __init__(self, path: object, reason: str, cause: Optional[BaseException] = None):
        self.path = path
        self.reason = reason
        self.cause = cause
        if cause is not None:
            message = f"path validation failed for {path!r}: {reason} (cause: {cause})"
        else:
            message = f"path validation failed for {path!r}: {reason}"
        super().__init__(message)


class HistoryErrorKind(Enum):
    """Reasons a history entry is refused."""

    EMPTY = "entry cannot be empty or whitespace-only"
    EMBEDDED_NEWLINE = "entry cannot contain embedded newlines"
    CONSECUTIVE_DUPLICATE = "consecutive duplicate entry not allowed"


class HistoryError(BaseAppError):
    """Exception raised when a history entry is rejected."""

    def __init__(self, kind: HistoryErrorKind):
        self.kind = kind
        super().__init__(f"history: {kind.value}")


class ToolError(BaseAppError):
    """Exception raised when a tool invocation fails."""

    pass


class ConfigurationError(BaseAppError):
    """Exception raised for configuration errors."""

    pass
