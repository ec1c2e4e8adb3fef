from __future__ import annotations

from typing import Any, Mapping, Sequence

from .constants import FORMAT_VERSION_MAJOR
from .errors import InvalidArchiveError, ValidationError
from .pathutil import norm_path


def describe_type(value: Any) -> str:
    """Name a value's type the way the JSON container would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def validate_patterns(patterns: Any) -> None:
    """Reject anything but a list/tuple of non-blank strings.

    Reports the first defect only, naming the offending index.
    """
    if patterns is None or isinstance(patterns, (str, bytes)) or not isinstance(patterns, Sequence):
        raise ValidationError("patterns must be an array of strings")
    for i, pattern in enumerate(patterns):
        if not isinstance(pattern, str):
            raise ValidationError(
                f"patterns[{i}] must be a string, got {describe_type(pattern)}", index=i
            )
        if pattern.strip() == "":
            raise ValidationError(f"patterns[{i}] must be a non-empty string", index=i)


def parse_major_version(version: str) -> int:
    head = version.strip().split(".", 1)[0]
    try:
        return int(head)
    except ValueError:
        raise InvalidArchiveError(f"Malformed format version: {version}") from None


def validate_container(data: Any) -> None:
    """Structural gate run before an archive is decoded or extracted."""
    if not isinstance(data, Mapping):
        raise InvalidArchiveError("Archive must be an object")
    meta = data.get("meta")
    if not isinstance(meta, Mapping):
        raise InvalidArchiveError("Missing metadata")
    version = meta.get("version")
    if not isinstance(version, str) or not version.strip():
        raise InvalidArchiveError("Missing version information")
    if parse_major_version(version) != FORMAT_VERSION_MAJOR:
        raise InvalidArchiveError(f"Unsupported format version: {version}")
    files = meta.get("files")
    if not isinstance(files, (list, tuple)):
        raise InvalidArchiveError("Invalid file entries")
    if not isinstance(data.get("blob"), str):
        raise InvalidArchiveError("Invalid or missing blob data")
    for i, item in enumerate(files):
        if not isinstance(item, Mapping) or not isinstance(item.get("path"), str):
            raise InvalidArchiveError(f"Invalid file entry at index {i}")
        validate_entry_path(item["path"])


def _has_drive(path: str) -> bool:
    # "C:", "C:/x" and "C:\x"; "a:b.txt" is an ordinary POSIX name
    if len(path) < 2 or path[1] != ":" or not (path[0].isascii() and path[0].isalpha()):
        return False
    return len(path) == 2 or path[2] in ("/", "\\")


def validate_entry_path(path: str) -> None:
    """Entry paths must be relative, non-empty and free of '..' segments."""
    if not path or path.startswith(("/", "\\")) or _has_drive(path):
        raise InvalidArchiveError(f"Unsafe entry path: {path!r}", path=path)
    if "\x00" in path:
        raise InvalidArchiveError("Invalid path contains NUL", path=path)
    try:
        normalized = norm_path(path)
    except ValueError:
        raise InvalidArchiveError(f"Unsafe entry path: {path!r}", path=path) from None
    if not normalized:
        raise InvalidArchiveError(f"Unsafe entry path: {path!r}", path=path)
