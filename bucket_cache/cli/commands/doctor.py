"""Compression tool diagnostic command"""

import sys

import click
from rich import box
from rich.table import Table

from ..decorators import async_command, compression_option
from ...constants import ZSTD_WITHOUT_LONG_VERSION
from ...core.compression import CompressionMethod, probe_all, select_compression_method
from ...utils.output import console


@click.command()
@compression_option
@async_command
async def doctor(compression_method):
    """Show which compression tools this runner has

    Reports each probed tool with its version and the method a save
    would use here.
    """
    probes = await probe_all()

    table = Table(title="Compression Tools", box=box.ROUNDED)
    table.add_column("Tool", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Version")
    table.add_column("Details")

    for tool, probe in probes.items():
        status = "[green]✓ Available[/green]" if probe.available else "[red]✗ Not Available[/red]"
        details = ""
        if tool == "zstd" and probe.available:
            details = f"--long needs >= {ZSTD_WITHOUT_LONG_VERSION}"
        table.add_row(
            tool,
            status,
            str(probe.version) if probe.version else "-",
            details
        )

    console.print(table)

    preference = CompressionMethod.from_tag(compression_method) if compression_method else None
    method = await select_compression_method(sys.platform, preference)
    console.print(f"\n[cyan]Platform:[/cyan] {sys.platform}")
    console.print(f"[cyan]Selected method:[/cyan] [bold]{method}[/bold]")
