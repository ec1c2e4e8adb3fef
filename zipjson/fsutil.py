from __future__ import annotations

import errno
import os
import stat
from datetime import datetime, timezone

from .errors import NotFoundError, OverwriteError, PermissionDeniedError
from .models import FileEntry, format_timestamp


_DENIED = (errno.EACCES, errno.EPERM)
# A file where a directory is needed, or the reverse
_CONFLICT = (errno.EEXIST, errno.EISDIR, errno.ENOTDIR)


def _map_os_error(exc: OSError, path: str, operation: str) -> Exception:
    if exc.errno == errno.ENOENT:
        return NotFoundError(path)
    if exc.errno in _DENIED:
        return PermissionDeniedError(path, operation)
    return exc


def read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        mapped = _map_os_error(exc, path, "read")
        if mapped is exc:
            raise
        raise mapped from exc


def write_file(path: str, data: bytes) -> None:
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as exc:
        if exc.errno in _DENIED:
            raise PermissionDeniedError(path, "write") from exc
        if exc.errno in _CONFLICT:
            raise OverwriteError(path) from exc
        raise


def make_dirs(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        if exc.errno in _DENIED:
            raise PermissionDeniedError(path, "create directory") from exc
        if exc.errno in _CONFLICT:
            raise OverwriteError(path) from exc
        raise


def set_permissions(path: str, mode: int) -> None:
    try:
        os.chmod(path, stat.S_IMODE(mode))
    except OSError as exc:
        mapped = _map_os_error(exc, path, "change permissions for")
        if mapped is exc:
            raise
        raise mapped from exc


def stat_entry(path: str, rel_path: str) -> FileEntry:
    """Capture ``path`` as a FileEntry recorded under ``rel_path``."""
    try:
        st = os.stat(path)
    except OSError as exc:
        mapped = _map_os_error(exc, path, "stat")
        if mapped is exc:
            raise
        raise mapped from exc
    is_dir = stat.S_ISDIR(st.st_mode)
    mtime = datetime.fromtimestamp(st.st_mtime_ns / 1_000_000_000, tz=timezone.utc)
    return FileEntry(
        path=rel_path,
        size=0 if is_dir else st.st_size,
        mode=st.st_mode,
        is_directory=is_dir,
        modified_at=format_timestamp(mtime),
    )


def path_exists(path: str) -> bool:
    return os.path.lexists(path)
