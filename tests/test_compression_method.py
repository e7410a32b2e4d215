"""Tests for compression method tags"""

import pytest

from bucket_cache.api.exceptions import UnknownCompressionMethodError
from bucket_cache.core.compression import CompressionMethod


def test_wire_literals_are_stable():
    assert [m.value for m in CompressionMethod] == [
        "gzip",
        "zstd (without long)",
        "zstd",
        "lz4",
    ]


@pytest.mark.parametrize("tag, expected", [
    ("gzip", CompressionMethod.GZIP),
    ("zstd (without long)", CompressionMethod.ZSTD_WITHOUT_LONG),
    ("zstd", CompressionMethod.ZSTD),
    ("lz4", CompressionMethod.LZ4),
])
def test_from_tag(tag, expected):
    assert CompressionMethod.from_tag(tag) is expected


def test_from_tag_accepts_member():
    assert CompressionMethod.from_tag(CompressionMethod.LZ4) is CompressionMethod.LZ4


@pytest.mark.parametrize("tag", [None, "", "GZIP", "zstd-without-long", "brotli"])
def test_from_tag_rejects_unknown(tag):
    with pytest.raises(UnknownCompressionMethodError) as exc_info:
        CompressionMethod.from_tag(tag)

    assert "Unrecognized compression method" in str(exc_info.value)
    assert exc_info.value.tag == tag


def test_compression_args():
    assert CompressionMethod.GZIP.compression_args() == ["-z"]
    assert CompressionMethod.ZSTD_WITHOUT_LONG.compression_args() == ["--use-compress-program", "zstd -T0"]
    assert CompressionMethod.ZSTD.compression_args() == ["--use-compress-program", "zstd -T0 --long=30"]
    assert CompressionMethod.LZ4.compression_args() == ["--use-compress-program", "lz4 --fast -BD"]


def test_decompression_args():
    assert CompressionMethod.GZIP.decompression_args() == ["-z"]
    assert CompressionMethod.ZSTD_WITHOUT_LONG.decompression_args() == ["--use-compress-program", "zstd -d"]
    assert CompressionMethod.ZSTD.decompression_args() == ["--use-compress-program", "zstd -d --long=30"]
    assert CompressionMethod.LZ4.decompression_args() == ["--use-compress-program", "lz4 -d"]


def test_args_are_copies():
    args = CompressionMethod.GZIP.compression_args()
    args.append("--bogus")
    assert CompressionMethod.GZIP.compression_args() == ["-z"]
