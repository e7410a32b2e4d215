"""bucket-cache - Save and restore CI caches in object storage.

Directories are archived with the system tar binary using the best
compression tool installed on the runner (zstd, lz4 or gzip). The method
is recorded as object metadata so a later run, possibly on a different
runner, extracts the archive with the same encoding.
"""

from .__version__ import __version__, __version_info__, __license__

# Exceptions
from .api.exceptions import (
    BucketCacheError,
    ArchiveError,
    ArchiveCreationError,
    ArchiveExtractionError,
    UnknownCompressionMethodError,
    ConfigError,
    StorageError,
    CacheNotFoundError,
)

# Core API
from .api.cache import save_cache, restore_cache
from .core.compression import CompressionMethod, TarProcessor, select_compression_method

# Data models
from .models import CacheConfig, SaveResult, RestoreResult

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Core API functions
    "save_cache",
    "restore_cache",
    "select_compression_method",

    # Main classes
    "CompressionMethod",
    "TarProcessor",

    # Data models
    "CacheConfig",
    "SaveResult",
    "RestoreResult",

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
