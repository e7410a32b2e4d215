# bucket_cache/storage/__init__.py
"""Storage backends for bucket-cache"""

from .base import StorageBackend
from .filesystem import FileSystemStorage
from .bos import BOSStorage
from .s3 import S3Storage
from .factory import StorageFactory

__all__ = [
    'StorageBackend',
    'FileSystemStorage',
    'BOSStorage',
    'S3Storage',
    'StorageFactory',
]
