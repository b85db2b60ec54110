"""Compressed-size signal for a single text."""

from __future__ import annotations

import zlib
from typing import Protocol

from msg_analyzer.config import get_config
from msg_analyzer.models import SizeEstimate


class Compressor(Protocol):
    """Anything that turns bytes into a deterministic compressed stream."""

    def compress(self, data: bytes) -> bytes: ...


class ZlibCompressor:
    """DEFLATE with the zlib wrapper.  Same input, same level -> same bytes."""

    def __init__(self, level: int | None = None):
        if level is None:
            level = get_config().compression_level
        if not 0 <= level <= 9:
            raise ValueError(f"zlib compression level must be 0-9, got {level}")
        self.level = level

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(data, self.level)


def encode_text(text: str) -> bytes:
    """UTF-8 bytes of ``text``.  Lone surrogates are encoded, not rejected."""
    return text.encode("utf-8", "surrogatepass")


def estimate_size(text: str, compressor: Compressor | None = None) -> SizeEstimate:
    """Compress ``text`` and report sizes in UTF-8 bytes.

    The ratio is ``compressed / original * 100``.  An empty text has no
    meaningful ratio; it reports 0.0.
    """
    compressor = compressor or ZlibCompressor()
    data = encode_text(text)
    compressed = compressor.compress(data)

    original_size = len(data)
    compressed_size = len(compressed)
    ratio = compressed_size / original_size * 100 if original_size else 0.0

    return SizeEstimate(
        original_size=original_size,
        compressed_size=compressed_size,
        compression_ratio=ratio,
    )
