from __future__ import annotations

import json
from typing import Any, Dict

from .errors import InvalidArchiveError, NotFoundError, PermissionDeniedError
from .fsutil import write_file
from .models import Archive


def dump_archive(archive: Archive) -> str:
    return json.dumps(archive.to_dict(), indent=2, ensure_ascii=False)


def load_archive(text: str) -> Dict[str, Any]:
    """Parse container text into its raw mapping (validated later by the reader)."""
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise InvalidArchiveError(f"Container is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidArchiveError("Archive must be an object")
    return data


def write_archive(archive: Archive, path: str) -> None:
    write_file(path, dump_archive(archive).encode("utf-8"))


def read_archive(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as exc:
        raise NotFoundError(path) from exc
    except PermissionError as exc:
        raise PermissionDeniedError(path, "read") from exc
    except IsADirectoryError as exc:
        raise InvalidArchiveError(f"Not a file: {path}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise InvalidArchiveError(f"Container is not UTF-8 text: {exc}", path=path) from exc
    return load_archive(text)
