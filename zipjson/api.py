"""Programmatic entry points, including file-path convenience wrappers.

``build``/``extract``/``list_entries`` work on in-memory archives; the
``*_file`` variants only add container (de)serialization around them.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .container import read_archive, write_archive
from .models import Archive, FileEntry, ProgressCallback
from .reader import ArchiveLike, extract, list_entries
from .validation import validate_patterns
from .writer import build


def build_to_file(
    patterns: Sequence[str],
    output_path: str,
    *,
    base_dir: Optional[str] = None,
    ignore: Iterable[str] = (),
    on_progress: Optional[ProgressCallback] = None,
) -> Archive:
    """Build an archive and write its container to ``output_path``."""
    validate_patterns(patterns)
    archive = build(patterns, base_dir=base_dir, ignore=ignore, on_progress=on_progress)
    write_archive(archive, output_path)
    return archive


def extract_from_file(
    input_path: str,
    *,
    output_dir: Optional[str] = None,
    overwrite: bool = False,
    preserve_permissions: bool = True,
    on_progress: Optional[ProgressCallback] = None,
) -> List[str]:
    return extract(
        read_archive(input_path),
        output_dir=output_dir,
        overwrite=overwrite,
        preserve_permissions=preserve_permissions,
        on_progress=on_progress,
    )


def list_from_file(input_path: str) -> List[FileEntry]:
    return list_entries(read_archive(input_path))


__all__ = [
    "ArchiveLike",
    "build",
    "build_to_file",
    "extract",
    "extract_from_file",
    "list_entries",
    "list_from_file",
]
