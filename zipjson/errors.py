from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    INVALID_ARCHIVE = "invalid_archive"
    ALREADY_EXISTS = "already_exists"
    COMPRESSION_FAILURE = "compression_failure"
    INVALID_INPUT = "invalid_input"


class ZipJsonError(Exception):
    """Base class for zipjson errors.

    Every error carries an explicit ``kind`` plus whatever structured fields
    apply (``path``, ``operation``, ``reason``, ``index``), so callers can
    branch without parsing messages.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        reason: Optional[str] = None,
        index: Optional[int] = None,
    ):
        super().__init__(message)
        self.path = path
        self.operation = operation
        self.reason = reason
        self.index = index


# Filesystem
class NotFoundError(ZipJsonError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}", path=path)


class PermissionDeniedError(ZipJsonError):
    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, path: str, operation: str):
        super().__init__(
            f"Permission denied: Cannot {operation} {path}",
            path=path,
            operation=operation,
        )


class OverwriteError(ZipJsonError):
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, path: str):
        super().__init__(f"File already exists: {path}", path=path)


# Archive/payload
class InvalidArchiveError(ZipJsonError):
    kind = ErrorKind.INVALID_ARCHIVE

    def __init__(self, reason: str, *, path: Optional[str] = None):
        super().__init__(f"Invalid archive: {reason}", reason=reason, path=path)


class CompressionError(ZipJsonError):
    kind = ErrorKind.COMPRESSION_FAILURE

    def __init__(self, reason: str):
        super().__init__(f"Compression error: {reason}", reason=reason)


# Caller input
class ValidationError(ZipJsonError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, reason: str, *, index: Optional[int] = None):
        super().__init__(reason, reason=reason, index=index)
