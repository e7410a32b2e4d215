# bucket_cache/cli/__init__.py
"""Command line interface for bucket-cache"""

from .main import cli, main

__all__ = ["cli", "main"]
