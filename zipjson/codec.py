from __future__ import annotations

import base64
import binascii
import gzip
import zlib
from typing import Optional

from .constants import COMPRESS_LEVEL
from .errors import CompressionError


class Codec:
    """gzip (deflate) + base64: bytes in, text-safe ASCII out.

    The blob is a standard gzip member, so any gzip/base64 tooling can
    inspect it. ``decode`` is all-or-nothing and reports every failure as
    ``CompressionError`` with the underlying cause kept in the message.
    """

    def __init__(self, level: Optional[int] = None):
        self.level = COMPRESS_LEVEL if level is None else level

    def encode(self, data: bytes) -> str:
        try:
            compressed = gzip.compress(data, compresslevel=self.level, mtime=0)
        except (TypeError, ValueError, zlib.error) as exc:
            raise CompressionError(f"Failed to compress data: {exc}") from exc
        return base64.b64encode(compressed).decode("ascii")

    def decode(self, text: str) -> bytes:
        try:
            raw = base64.b64decode(text, validate=True)
        except (TypeError, ValueError, binascii.Error) as exc:
            raise CompressionError(f"Failed to decompress data: {exc}") from exc
        try:
            return gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as exc:
            # gzip.BadGzipFile is an OSError subclass
            raise CompressionError(f"Failed to decompress data: {exc}") from exc


_default = Codec()


def encode(data: bytes) -> str:
    return _default.encode(data)


def decode(text: str) -> bytes:
    return _default.decode(text)
