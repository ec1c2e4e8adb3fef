from __future__ import annotations

import stat
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping

from .constants import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, FORMAT_VERSION


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


@dataclass(frozen=True)
class FileEntry:
    path: str
    size: int
    mode: int
    is_directory: bool
    modified_at: str

    @property
    def permissions(self) -> int:
        return stat.S_IMODE(self.mode)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "size": self.size,
            "mode": self.mode,
            "isDirectory": self.is_directory,
            "modifiedAt": self.modified_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileEntry":
        is_dir = bool(data.get("isDirectory", False))
        mode = data.get("mode")
        if not isinstance(mode, int) or isinstance(mode, bool):
            mode = DEFAULT_DIR_MODE if is_dir else DEFAULT_FILE_MODE
        size = data.get("size", 0)
        if not isinstance(size, int) or isinstance(size, bool):
            size = 0
        return cls(
            path=data["path"],
            size=0 if is_dir else size,
            mode=mode,
            is_directory=is_dir,
            modified_at=str(data.get("modifiedAt", "")),
        )


@dataclass
class Archive:
    """In-memory form of the container: metadata plus the encoded payload."""

    entries: List[FileEntry] = field(default_factory=list)
    total_size: int = 0
    entry_count: int = 0
    payload: str = ""
    format_version: str = FORMAT_VERSION
    created_at: str = field(default_factory=utc_now)

    @property
    def is_empty(self) -> bool:
        return not self.payload

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": {
                "version": self.format_version,
                "createdAt": self.created_at,
                "files": [e.to_dict() for e in self.entries],
                "totalSize": self.total_size,
                "fileCount": self.entry_count,
            },
            "blob": self.payload,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Archive":
        """Build an Archive from the container mapping.

        Expects data that already passed ``validation.validate_container``.
        """
        meta = data["meta"]
        entries = [FileEntry.from_dict(f) for f in meta["files"]]
        total_size = meta.get("totalSize")
        if not isinstance(total_size, int):
            total_size = sum(e.size for e in entries if not e.is_directory)
        entry_count = meta.get("fileCount")
        if not isinstance(entry_count, int):
            entry_count = sum(1 for e in entries if not e.is_directory)
        return cls(
            entries=entries,
            total_size=total_size,
            entry_count=entry_count,
            payload=data["blob"],
            format_version=meta["version"],
            created_at=str(meta.get("createdAt", "")),
        )


class OperationKind(Enum):
    ZIP = "zip"
    UNZIP = "unzip"


@dataclass(frozen=True)
class ProgressInfo:
    operation: OperationKind
    current_path: str
    processed_count: int
    total_count: int
    processed_bytes: int
    total_bytes: int
    percentage: int


# Invoked synchronously on the caller's thread; exceptions propagate into build/extract
ProgressCallback = Callable[[ProgressInfo], None]
