from __future__ import annotations

import os


def norm_path(p: str) -> str:
    """Normalize archive paths to a canonical forward-slash form.

    Rules:
    - Convert backslashes to slashes
    - Strip leading/trailing slashes
    - Remove empty and '.' segments
    - Reject '..' segments
    """
    p = p.replace("\\", "/").strip("/")
    parts = [q for q in p.split("/") if q not in ("", ".")]
    for q in parts:
        if q == "..":
            raise ValueError("Path may not contain '..'")
    return "/".join(parts)


def normalize_pattern(pattern: str) -> str:
    return pattern.replace("\\", "/")


def relative_posix(path: str, base_dir: str) -> str:
    """Path of ``path`` relative to ``base_dir`` using forward slashes."""
    return os.path.relpath(path, base_dir).replace(os.sep, "/").replace("\\", "/")


def is_within(path: str, root: str) -> bool:
    root = os.path.realpath(root)
    target = os.path.realpath(path)
    return target == root or target.startswith(root.rstrip(os.sep) + os.sep)
