# bucket_cache/api/__init__.py
"""API layer for bucket-cache"""

from .exceptions import (
    BucketCacheError,
    ArchiveError,
    ArchiveCreationError,
    ArchiveExtractionError,
    UnknownCompressionMethodError,
    ConfigError,
    StorageError,
    CacheNotFoundError,
)
from .cache import save_cache, restore_cache

__all__ = [
    # Convenience functions
    "save_cache",
    "restore_cache",

    # Exceptions
    "BucketCacheError",
    "ArchiveError",
    "ArchiveCreationError",
    "ArchiveExtractionError",
    "UnknownCompressionMethodError",
    "ConfigError",
    "StorageError",
    "CacheNotFoundError",
]
