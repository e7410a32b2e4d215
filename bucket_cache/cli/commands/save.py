"""Save command implementation"""

import click

from ..decorators import async_command, cache_options, compression_option
from ...services.cache_service import CacheService
from ...services.config_service import ConfigService
from ...utils.output import console


@click.command()
@cache_options
@compression_option
@click.pass_context
@async_command
async def save(ctx, config_path, bucket, key, paths, key_file_name, working_dir,
               storage_type, endpoint, region, compression_method):
    """Archive paths and upload them under a cache key

    Examples:
        bucket-cache save -b ci-cache -k deps-$HASH -p node_modules
        bucket-cache save -s filesystem -b /mnt/cache -k build-1 -p out -m lz4
    """
    config = ConfigService().load(config_path, overrides={
        "bucket": bucket,
        "key": key,
        "paths": list(paths),
        "key_file_name": key_file_name,
        "working_dir": working_dir,
        "storage_type": storage_type,
        "endpoint": endpoint,
        "region": region,
        "compression_method": compression_method,
    })

    result = await CacheService(config).save()

    if ctx.obj and ctx.obj.verbose and result.saved:
        console.print(f"[dim]Object: {config.bucket}/{result.object_key} "
                      f"in {result.duration:.1f}s[/dim]")
