from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Union

from .models import parse_timestamp
from .progress import percentage


_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(num: int) -> str:
    if num <= 0:
        return "0 Bytes"
    i = 0
    value = float(num)
    while value >= 1024 and i < len(_SIZE_UNITS) - 1:
        value /= 1024
        i += 1
    text = str(int(value)) if i == 0 else f"{value:.1f}"
    return f"{text} {_SIZE_UNITS[i]}"


def format_date(value: Union[str, datetime]) -> str:
    """Local-time ``YYYY-MM-DD HH:MM:SS``; unparseable strings pass through."""
    if isinstance(value, str):
        try:
            value = parse_timestamp(value)
        except ValueError:
            return value
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_percentage(value: float) -> str:
    return f"{int(math.floor(value + 0.5))}%"


def format_path(path: str, max_length: int = 50) -> str:
    """Shorten long paths by eliding middle segments ("a/b/.../name")."""
    if len(path) <= max_length:
        return path
    parts = path.split("/")
    if len(parts) <= 2:
        return "..." + path[-(max_length - 3):]

    result = parts[0]
    remaining = parts[1:]
    while len(remaining) > 1:
        if len(result + "/.../" + remaining[-1]) > max_length:
            break
        result += "/" + remaining.pop(0)

    last = remaining[-1]
    candidate = result + "/.../" + last
    if len(candidate) > max_length:
        return f"{parts[0]}/.../{last}"
    return candidate


def format_progress(current: int, total: int, prefix: str = "", width: int = 20) -> str:
    pct = percentage(current, total)
    filled = int(math.floor(pct / 100 * width + 0.5))
    bar = "[" + "=" * filled + " " * (width - filled) + "]"
    return f"{prefix}{bar} {pct}% ({current}/{total})"


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    return singular if count == 1 else (plural or singular + "s")
