from __future__ import annotations

import base64
import json
import logging
import os
from typing import Dict, Iterable, List, Optional, Sequence

from .codec import Codec
from .collector import collect
from .constants import DEFAULT_IGNORES, FORMAT_VERSION
from .errors import ZipJsonError
from .fsutil import read_file
from .models import Archive, FileEntry, OperationKind, ProgressCallback, utc_now
from .progress import ProgressReporter


log = logging.getLogger(__name__)


def serialize_payload(contents: Dict[str, str]) -> bytes:
    """Compact JSON of the path -> base64 map, keys in insertion order."""
    return json.dumps(contents, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class ArchiveWriter:
    """Builds an in-memory Archive from files matched under ``base_dir``.

    All file bodies are held in memory and compressed in a single pass over
    the whole path -> bytes map, so peak memory tracks total input size.
    """

    def __init__(
        self,
        base_dir: Optional[str] = None,
        ignore: Iterable[str] = (),
        on_progress: Optional[ProgressCallback] = None,
        *,
        default_ignores: Sequence[str] = DEFAULT_IGNORES,
        codec: Optional[Codec] = None,
    ):
        self.base_dir = os.path.abspath(base_dir or os.getcwd())
        self.ignore = list(ignore)
        self.on_progress = on_progress
        self.default_ignores = tuple(default_ignores)
        self.codec = codec or Codec()

    def build(self, patterns: Sequence[str]) -> Archive:
        files = collect(
            patterns,
            self.base_dir,
            self.ignore,
            default_ignores=self.default_ignores,
        )
        if not files:
            return Archive()

        file_entries = [f for f in files if not f.is_directory]
        progress = ProgressReporter(
            OperationKind.ZIP,
            total_count=len(file_entries),
            total_bytes=sum(f.size for f in file_entries),
            callback=self.on_progress,
        )

        entries: List[FileEntry] = []
        contents: Dict[str, str] = {}
        total_size = 0
        entry_count = 0
        for entry in files:
            if entry.is_directory:
                entries.append(entry)
                continue
            try:
                data = read_file(os.path.join(self.base_dir, entry.path))
            except (ZipJsonError, OSError) as exc:
                log.debug("Skipping unreadable file %s: %s", entry.path, exc)
                continue
            contents[entry.path] = base64.b64encode(data).decode("ascii")
            entries.append(entry)
            total_size += entry.size
            entry_count += 1
            progress.advance(entry.path, entry.size)

        progress.finish()

        return Archive(
            entries=entries,
            total_size=total_size,
            entry_count=entry_count,
            payload=self.codec.encode(serialize_payload(contents)),
            format_version=FORMAT_VERSION,
            created_at=utc_now(),
        )


def build(
    patterns: Sequence[str],
    *,
    base_dir: Optional[str] = None,
    ignore: Iterable[str] = (),
    on_progress: Optional[ProgressCallback] = None,
) -> Archive:
    return ArchiveWriter(base_dir, ignore, on_progress).build(patterns)
