# bucket_cache/models/__init__.py
"""Data models for bucket-cache"""

from .config import CacheConfig
from .result import SaveResult, RestoreResult

__all__ = [
    "CacheConfig",
    "SaveResult",
    "RestoreResult",
]
