# bucket_cache/services/__init__.py
"""Service layer for bucket-cache"""

from .cache_service import CacheService, write_restore_outputs
from .config_service import ConfigService

__all__ = [
    "CacheService",
    "ConfigService",
    "write_restore_outputs",
]
