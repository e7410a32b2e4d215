# bucket_cache/core/compression/method.py
"""Compression method tags and their tar flags"""

from enum import Enum
from typing import List

from ...api.exceptions import UnknownCompressionMethodError


class CompressionMethod(Enum):
    """
    Compression used for a cache archive

    The values are persisted next to uploaded archives and must stay
    byte-for-byte stable.
    """
    GZIP = "gzip"
    ZSTD_WITHOUT_LONG = "zstd (without long)"
    ZSTD = "zstd"
    LZ4 = "lz4"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag) -> "CompressionMethod":
        """
        Parse a persisted method tag

        Args:
            tag: One of the literal tag strings (or a CompressionMethod)

        Returns:
            Matching compression method

        Raises:
            UnknownCompressionMethodError: If the tag is missing or unknown
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownCompressionMethodError(tag)

    def compression_args(self) -> List[str]:
        """tar flags used when creating an archive"""
        return list(_COMPRESSION_ARGS[self])

    def decompression_args(self) -> List[str]:
        """tar flags used when extracting an archive"""
        return list(_DECOMPRESSION_ARGS[self])


_COMPRESSION_ARGS = {
    CompressionMethod.GZIP: ("-z",),
    CompressionMethod.ZSTD_WITHOUT_LONG: ("--use-compress-program", "zstd -T0"),
    CompressionMethod.ZSTD: ("--use-compress-program", "zstd -T0 --long=30"),
    CompressionMethod.LZ4: ("--use-compress-program", "lz4 --fast -BD"),
}

_DECOMPRESSION_ARGS = {
    CompressionMethod.GZIP: ("-z",),
    CompressionMethod.ZSTD_WITHOUT_LONG: ("--use-compress-program", "zstd -d"),
    CompressionMethod.ZSTD: ("--use-compress-program", "zstd -d --long=30"),
    CompressionMethod.LZ4: ("--use-compress-program", "lz4 -d"),
}
