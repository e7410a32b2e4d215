"""Programmatic cache API"""

import asyncio
from pathlib import Path
from typing import Optional, Union

from ..models.result import RestoreResult, SaveResult
from ..services.cache_service import CacheService
from ..services.config_service import ConfigService


def save_cache(config_path: Optional[Union[str, Path]] = None, **options) -> SaveResult:
    """
    Save a cache

    Args:
        config_path: Optional YAML configuration file
        **options: CacheConfig fields, e.g. bucket, key, paths,
            compression_method, storage_type

    Returns:
        SaveResult

    Example:
        save_cache(bucket="ci-cache", key="deps-abc123", paths=["node_modules"])
    """
    config = ConfigService().load(config_path, overrides=options)
    return asyncio.run(CacheService(config).save())


def restore_cache(config_path: Optional[Union[str, Path]] = None, **options) -> RestoreResult:
    """
    Restore a cache

    Args:
        config_path: Optional YAML configuration file
        **options: CacheConfig fields, e.g. bucket, key, restore_keys

    Returns:
        RestoreResult; check ``cache_hit`` / ``restored``
    """
    config = ConfigService().load(config_path, overrides=options)
    return asyncio.run(CacheService(config).restore())
