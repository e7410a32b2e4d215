# bucket_cache/cli/main.py
"""Main CLI entry point for bucket-cache"""

import sys
import logging

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..api.exceptions import BucketCacheError
from ..constants import APP_NAME, LOG_FORMAT
from ..utils.output import console, print_error

from .commands import save, restore, doctor


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    for name in ("asyncio", "aiofiles", "boto3", "botocore", "s3transfer", "urllib3", "baidubce"):
        logging.getLogger(name).setLevel(logging.WARNING)


class Context:
    """CLI context object"""

    def __init__(self):
        self.verbose: bool = False
        self.debug: bool = False


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Bucket Cache - Save and restore CI caches in object storage

    Archives are compressed with the best tool on the runner (zstd, lz4
    or gzip) and the method is stored with the object, so a restore on
    any runner decodes it the same way.
    """
    if quiet:
        logging.disable(logging.CRITICAL)
        console.quiet = True
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(save.save)
cli.add_command(restore.restore)
cli.add_command(doctor.doctor)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Errors raised by cache operations
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    debug = '--debug' in sys.argv or '-d' in sys.argv

    try:
        cli(prog_name=APP_NAME, standalone_mode=False)

    except click.exceptions.Abort:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except BucketCacheError as e:
        console.quiet = False
        code = f" [{e.error_code}]" if e.error_code else ""
        print_error(f"{e}{code}")
        if debug:
            console.print_exception()
        sys.exit(1)

    except Exception as e:
        console.quiet = False
        console.print(f"[red]Unexpected error: {e}[/red]")
        if debug:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
