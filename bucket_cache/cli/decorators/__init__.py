# bucket_cache/cli/decorators/__init__.py
"""CLI decorators"""

from .async_command import async_command
from .options import cache_options, compression_option

__all__ = [
    'async_command',
    'cache_options',
    'compression_option',
]
