# bucket_cache/core/compression/negotiator.py
"""Compression method negotiation"""

import logging
from typing import Optional

from packaging.version import Version

from .method import CompressionMethod
from .probe import probe_tool
from ...constants import ZSTD_WITHOUT_LONG_VERSION
from ...utils.process import CommandRunner

logger = logging.getLogger(__name__)


def is_windows(platform: str) -> bool:
    """Check a ``sys.platform`` style identifier for Windows"""
    return (platform or "").lower().startswith("win")


async def select_compression_method(platform: str,
                                    preference: Optional[CompressionMethod] = None,
                                    runner: Optional[CommandRunner] = None) -> CompressionMethod:
    """
    Pick the compression method for a new archive

    Args:
        platform: Host platform identifier (``sys.platform``)
        preference: Configured compression preference, if any
        runner: Command runner used for the tool probes

    Returns:
        Compression method to create the archive with
    """
    if is_windows(platform):
        return CompressionMethod.GZIP

    if preference == CompressionMethod.GZIP:
        return CompressionMethod.GZIP

    lz4 = await probe_tool("lz4", runner)
    # lz4 version is reported by probe but never gates the choice
    if lz4.available and preference == CompressionMethod.LZ4:
        return CompressionMethod.LZ4

    zstd = await probe_tool("zstd", runner)
    if zstd.available:
        if zstd.version is None or zstd.version < Version(ZSTD_WITHOUT_LONG_VERSION):
            logger.debug("zstd %s does not support --long", zstd.version or "(unknown)")
            return CompressionMethod.ZSTD_WITHOUT_LONG
        return CompressionMethod.ZSTD

    return CompressionMethod.GZIP
