# bucket_cache/cli/decorators/options.py
"""Shared cache options for save and restore"""

from pathlib import Path
from typing import Callable

import click

from ...core.compression import CompressionMethod
from ...storage.factory import StorageFactory


def cache_options(func: Callable) -> Callable:
    """Attach the options common to every cache command

    Unset options are passed as None so environment inputs and the
    configuration file keep their values.
    """
    options = [
        click.option('--config', '-c', 'config_path',
                     type=click.Path(exists=True, dir_okay=False, path_type=Path),
                     help='YAML configuration file'),
        click.option('--bucket', '-b', help='Bucket name (directory for filesystem storage)'),
        click.option('--key', '-k', help='Primary cache key'),
        click.option('--path', '-p', 'paths', multiple=True,
                     help='Path to cache, relative to the working directory (repeatable)'),
        click.option('--key-file-name', help='Object name of the archive under the key'),
        click.option('--working-dir', '-C',
                     type=click.Path(file_okay=False, path_type=str),
                     help='Directory the cached paths are relative to'),
        click.option('--storage-type', '-s',
                     type=click.Choice(StorageFactory.get_supported_types()),
                     help='Storage backend'),
        click.option('--endpoint', help='Storage endpoint URL'),
        click.option('--region', help='Storage region'),
    ]

    for option in reversed(options):
        func = option(func)
    return func


def compression_option(func: Callable) -> Callable:
    """Attach the compression preference option"""
    return click.option(
        '--compression-method', '-m',
        type=click.Choice([m.value for m in CompressionMethod]),
        help='Preferred compression method'
    )(func)
