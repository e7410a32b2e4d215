"""Output formatting utilities"""

from rich.console import Console
from rich.markup import escape

from ..constants import EMOJI_ERROR

console = Console()


def print_error(message: str) -> None:
    """Print error message"""
    console.print(f"[red]{EMOJI_ERROR}[/red] {escape(message)}")


def print_info(message: str) -> None:
    """Print informational message"""
    console.print(escape(message), highlight=False)


def format_size(size: int) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"
