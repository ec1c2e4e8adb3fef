"""
zipjson: bundle files into a single self-describing JSON container.

- Glob-based collection with default ignores (VCS metadata, OS junk, temp files).
- Whole-collection gzip compression stored as base64 text, safe to embed anywhere
  JSON travels.
- Extraction with fail-fast overwrite protection, best-effort permission
  restoration and throttled progress callbacks.
- Typed error taxonomy (``ZipJsonError.kind``) for programmatic handling.
"""

__version__ = "1.0.0"

from .api import (
    build,
    build_to_file,
    extract,
    extract_from_file,
    list_entries,
    list_from_file,
)
from .errors import (
    CompressionError,
    ErrorKind,
    InvalidArchiveError,
    NotFoundError,
    OverwriteError,
    PermissionDeniedError,
    ValidationError,
    ZipJsonError,
)
from .models import Archive, FileEntry, OperationKind, ProgressInfo

__all__ = [
    "Archive",
    "CompressionError",
    "ErrorKind",
    "FileEntry",
    "InvalidArchiveError",
    "NotFoundError",
    "OperationKind",
    "OverwriteError",
    "PermissionDeniedError",
    "ProgressInfo",
    "ValidationError",
    "ZipJsonError",
    "build",
    "build_to_file",
    "extract",
    "extract_from_file",
    "list_entries",
    "list_from_file",
]
