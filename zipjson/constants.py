from __future__ import annotations

from typing import Tuple


# Container format revision; readers reject other major versions
FORMAT_VERSION = "1.0.0"
FORMAT_VERSION_MAJOR = 1

# gzip/deflate effort used for the payload blob (0-9)
COMPRESS_LEVEL = 9

# Progress callbacks fire after every Nth processed file (plus one terminal event)
PROGRESS_INTERVAL = 10

# Prepended to caller-supplied ignore patterns during collection
DEFAULT_IGNORES: Tuple[str, ...] = (
    "**/node_modules/**",
    "**/.git/**",
    "**/.DS_Store",
    "**/Thumbs.db",
    "**/*.tmp",
    "**/*.temp",
)

# Mode bits applied when an entry carries no mode
DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755
