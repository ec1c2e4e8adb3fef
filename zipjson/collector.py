"""Expand glob patterns against a base directory into archive entries.

Patterns use the ``glob`` dialect (``*``, ``?``, ``[seq]``, recursive
``**``) and include dotfiles. Ignore patterns are gitignore-style
(``pathspec.GitIgnoreSpec``) and are evaluated against the path relative to
the base directory; a pattern ending in ``/**`` also drops the directory
itself.
"""

from __future__ import annotations

import glob
import logging
import os
from typing import Iterable, List, Optional, Sequence, Set

import pathspec

from .constants import DEFAULT_IGNORES
from .errors import ZipJsonError
from .fsutil import stat_entry
from .models import FileEntry
from .pathutil import normalize_pattern, relative_posix
from .validation import validate_patterns


log = logging.getLogger(__name__)


def merge_ignores(ignore: Iterable[str], defaults: Sequence[str] = DEFAULT_IGNORES) -> List[str]:
    """Defaults first, then caller patterns in their given order."""
    return [*defaults, *ignore]


class IgnoreMatcher:
    def __init__(self, patterns: Iterable[str]):
        lines: List[str] = []
        for p in patterns:
            if not p or not p.strip():
                continue
            p = normalize_pattern(p.strip())
            lines.append(p)
            # "dir/**" also covers "dir" itself
            if p.endswith("/**") and len(p) > 3:
                lines.append(p[:-2])
        self.spec = pathspec.GitIgnoreSpec.from_lines(lines)

    def matches(self, rel_path: str, is_dir: bool = False) -> bool:
        if self.spec.match_file(rel_path):
            return True
        return is_dir and self.spec.match_file(rel_path + "/")


def match_pattern(pattern: str, base_dir: str) -> List[str]:
    """Absolute paths (files and directories) matching one pattern."""
    pattern = normalize_pattern(pattern)
    hits = glob.glob(pattern, root_dir=base_dir, recursive=True, include_hidden=True)
    return [os.path.normpath(os.path.join(base_dir, h)) for h in hits]


def collect(
    patterns: Sequence[str],
    base_dir: Optional[str] = None,
    ignore: Iterable[str] = (),
    *,
    default_ignores: Sequence[str] = DEFAULT_IGNORES,
) -> List[FileEntry]:
    """Collect entries for ``patterns`` under ``base_dir``.

    Matches from every pattern are merged without duplicates and ordered by
    their absolute path; archive entry order and payload order both follow
    from this ordering. Paths whose stat fails, or whose names are not
    valid UTF-8, are dropped.
    """
    validate_patterns(patterns)
    if not patterns:
        return []
    base = os.path.abspath(base_dir or os.getcwd())
    matcher = IgnoreMatcher(merge_ignores(ignore, default_ignores))

    found: Set[str] = set()
    for pattern in patterns:
        for abs_path in match_pattern(pattern, base):
            if abs_path != base:
                found.add(abs_path)

    entries: List[FileEntry] = []
    for abs_path in sorted(found):
        rel = relative_posix(abs_path, base)
        if rel.startswith("../") or rel == "..":
            log.debug("Skipping %s: outside %s", abs_path, base)
            continue
        try:
            rel.encode("utf-8")
        except UnicodeEncodeError:
            log.debug("Skipping %r: name is not valid UTF-8", abs_path)
            continue
        if matcher.matches(rel, os.path.isdir(abs_path)):
            continue
        try:
            entries.append(stat_entry(abs_path, rel))
        except (ZipJsonError, OSError) as exc:
            log.debug("Dropping %s: %s", abs_path, exc)
            continue
    return entries
