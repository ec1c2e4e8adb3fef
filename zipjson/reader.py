from __future__ import annotations

import base64
import binascii
import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from .codec import Codec
from .errors import CompressionError, InvalidArchiveError, OverwriteError, ZipJsonError
from .fsutil import make_dirs, path_exists, set_permissions, write_file
from .models import Archive, FileEntry, OperationKind, ProgressCallback
from .pathutil import is_within, norm_path
from .progress import ProgressReporter
from .validation import validate_container


log = logging.getLogger(__name__)

ArchiveLike = Union[Archive, Mapping[str, Any]]


def load(archive: ArchiveLike) -> Archive:
    """Validate ``archive`` (object or container mapping) and return an Archive."""
    data = archive.to_dict() if isinstance(archive, Archive) else archive
    validate_container(data)
    return Archive.from_dict(data)


def list_entries(archive: ArchiveLike) -> List[FileEntry]:
    """Entries recorded in the metadata; the payload is not decoded."""
    return list(load(archive).entries)


class ArchiveReader:
    """Restores an Archive's entries beneath ``output_dir``.

    Extraction is fail-fast on existing files unless ``overwrite`` is set;
    files already written by the same call are left in place. Entries with
    no payload data are skipped without error.
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        overwrite: bool = False,
        preserve_permissions: bool = True,
        on_progress: Optional[ProgressCallback] = None,
        *,
        codec: Optional[Codec] = None,
    ):
        self.output_dir = output_dir or os.getcwd()
        self.overwrite = overwrite
        self.preserve_permissions = preserve_permissions
        self.on_progress = on_progress
        self.codec = codec or Codec()
        self.skipped: List[str] = []

    def extract(self, archive: ArchiveLike) -> List[str]:
        arc = load(archive)
        self.skipped = []
        if arc.is_empty:
            return []
        contents = self._decode_payload(arc.payload)

        file_entries = [e for e in arc.entries if not e.is_directory]
        progress = ProgressReporter(
            OperationKind.UNZIP,
            total_count=len(file_entries),
            total_bytes=arc.total_size,
            callback=self.on_progress,
        )

        written: List[str] = []
        for entry in arc.entries:
            dst = self._destination(entry.path)
            if entry.is_directory:
                make_dirs(dst)
                written.append(dst)
                continue

            if path_exists(dst) and not self.overwrite:
                raise OverwriteError(dst)
            make_dirs(os.path.dirname(dst) or ".")

            encoded = contents.get(entry.path)
            if not isinstance(encoded, str):
                self.skipped.append(entry.path)
                continue
            try:
                data = base64.b64decode(encoded, validate=True)
            except (ValueError, binascii.Error) as exc:
                raise InvalidArchiveError(f"Corrupt payload data for {entry.path}", path=entry.path) from exc
            write_file(dst, data)
            if self.preserve_permissions:
                self._apply_mode(dst, entry.mode)

            written.append(dst)
            progress.advance(entry.path, entry.size)

        progress.finish()

        if self.skipped:
            log.warning(
                "%d of %d file entries had no payload data and were not extracted",
                len(self.skipped),
                len(file_entries),
            )
        return written

    # internals
    def _decode_payload(self, payload: str) -> Dict[str, Any]:
        try:
            contents = json.loads(self.codec.decode(payload).decode("utf-8"))
        except (CompressionError, UnicodeDecodeError, ValueError) as exc:
            raise InvalidArchiveError(f"Failed to decompress or parse archive blob: {exc}") from exc
        if not isinstance(contents, dict):
            raise InvalidArchiveError("Failed to decompress or parse archive blob: payload is not an object")
        return contents

    def _destination(self, arc_path: str) -> str:
        dst = os.path.join(self.output_dir, *norm_path(arc_path).split("/"))
        if not is_within(dst, self.output_dir):
            raise InvalidArchiveError(f"Entry escapes output directory: {arc_path}", path=arc_path)
        return dst

    def _apply_mode(self, path: str, mode: int) -> None:
        """Best-effort chmod that never raises."""
        try:
            set_permissions(path, mode)
        except (ZipJsonError, OSError) as exc:
            log.warning("Failed to set mode on %s: %s", path, exc)


def extract(
    archive: ArchiveLike,
    *,
    output_dir: Optional[str] = None,
    overwrite: bool = False,
    preserve_permissions: bool = True,
    on_progress: Optional[ProgressCallback] = None,
) -> List[str]:
    return ArchiveReader(output_dir, overwrite, preserve_permissions, on_progress).extract(archive)
