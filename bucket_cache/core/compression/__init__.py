# bucket_cache/core/compression/__init__.py
"""Compression module for bucket-cache"""

from .method import CompressionMethod
from .probe import ProbeResult, parse_version, probe_tool, probe_all
from .negotiator import select_compression_method
from .tar_processor import TarProcessor

__all__ = [
    "CompressionMethod",
    "ProbeResult",
    "parse_version",
    "probe_tool",
    "probe_all",
    "select_compression_method",
    "TarProcessor",
]
