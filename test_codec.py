from __future__ import annotations

import base64
import gzip
import os
import unittest

from zipjson.codec import Codec, decode, encode
from zipjson.errors import CompressionError, ErrorKind


class CodecTests(unittest.TestCase):
    def test_inverse_for_assorted_payloads(self):
        samples = [
            b"",
            b"a",
            b"hello world\n" * 200,
            os.urandom(4096),
            "unicode: é中\U0001f600".encode("utf-8"),
        ]
        for data in samples:
            with self.subTest(size=len(data)):
                self.assertEqual(decode(encode(data)), data)

    def test_output_is_ascii_base64_of_gzip(self):
        text = encode(b"payload")
        self.assertIsInstance(text, str)
        text.encode("ascii")
        raw = base64.b64decode(text)
        self.assertEqual(raw[:2], b"\x1f\x8b")
        self.assertEqual(gzip.decompress(raw), b"payload")

    def test_compresses_repetitive_input(self):
        data = b"abcdefgh" * 10_000
        self.assertLess(len(encode(data)), len(data) // 10)

    def test_level_is_configurable(self):
        data = b"xyz" * 1000
        fast = Codec(level=1)
        self.assertEqual(fast.level, 1)
        self.assertEqual(fast.decode(fast.encode(data)), data)
        self.assertEqual(Codec().level, 9)

    def test_malformed_base64_raises_compression_error(self):
        with self.assertRaises(CompressionError) as ctx:
            decode("not base64 at all!!")
        self.assertEqual(ctx.exception.kind, ErrorKind.COMPRESSION_FAILURE)
        self.assertIn("Failed to decompress data", str(ctx.exception))

    def test_valid_base64_invalid_stream_raises_compression_error(self):
        bogus = base64.b64encode(b"definitely not gzip").decode("ascii")
        with self.assertRaises(CompressionError) as ctx:
            decode(bogus)
        self.assertIsNotNone(ctx.exception.__cause__)
        self.assertTrue(ctx.exception.reason)

    def test_truncated_stream_raises_compression_error(self):
        raw = base64.b64decode(encode(os.urandom(2048)))
        truncated = base64.b64encode(raw[: len(raw) // 2]).decode("ascii")
        with self.assertRaises(CompressionError):
            decode(truncated)


if __name__ == "__main__":
    unittest.main()
