"""Restore command implementation"""

import click

from ..decorators import async_command, cache_options
from ...services.cache_service import CacheService, write_restore_outputs
from ...services.config_service import ConfigService
from ...utils.output import console


@click.command()
@cache_options
@click.option('--restore-key', '-r', 'restore_keys', multiple=True,
              help='Key prefix tried when the primary key misses (repeatable, in order)')
@click.option('--fail-on-cache-miss', is_flag=True,
              help='Exit with an error when no cache matches')
@click.pass_context
@async_command
async def restore(ctx, config_path, bucket, key, paths, key_file_name, working_dir,
                  storage_type, endpoint, region, restore_keys, fail_on_cache_miss):
    """Download the best matching cache and extract it

    Examples:
        bucket-cache restore -b ci-cache -k deps-$HASH -r deps-
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
        "restore_keys": list(restore_keys),
        "fail_on_cache_miss": fail_on_cache_miss or None,
    })

    result = await CacheService(config).restore()
    write_restore_outputs(result)

    if ctx.obj and ctx.obj.verbose and result.restored:
        console.print(f"[dim]cache-hit={str(result.cache_hit).lower()} "
                      f"matched-key={result.matched_key} in {result.duration:.1f}s[/dim]")
