"""Storage backend factory"""

from typing import Dict, Type

from .base import StorageBackend
from .filesystem import FileSystemStorage
from .bos import BOSStorage
from .s3 import S3Storage
from ..constants import StorageType
from ..models.config import CacheConfig


class StorageFactory:
    """Factory for creating storage backend instances"""

    # Registry of storage backends
    _backends: Dict[StorageType, Type[StorageBackend]] = {
        StorageType.FILESYSTEM: FileSystemStorage,
        StorageType.BOS: BOSStorage,
        StorageType.S3: S3Storage,
    }

    @classmethod
    def create_from_config(cls, config: CacheConfig) -> StorageBackend:
        """Create storage backend from cache configuration

        Args:
            config: Cache configuration

        Returns:
            Storage backend instance

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = config.storage

        if storage_type not in cls._backends:
            raise ValueError(f"Unsupported storage type: {storage_type.value}")

        if storage_type == StorageType.FILESYSTEM:
            backend_config = {"path": config.bucket}
        else:
            backend_config = {
                "bucket": config.bucket,
                "endpoint": config.endpoint,
                "region": config.region,
                "access_key": config.access_key,
                "secret_key": config.secret_key,
            }

        if config.options:
            backend_config.update(config.options)

        return cls._backends[storage_type](backend_config)

    @classmethod
    def get_supported_types(cls) -> list:
        """Get list of supported storage type names"""
        return [st.value for st in cls._backends.keys()]
