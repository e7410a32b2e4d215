# bucket_cache/cli/commands/__init__.py
"""CLI commands for bucket-cache"""

from . import save, restore, doctor

__all__ = [
    'save',
    'restore',
    'doctor',
]
