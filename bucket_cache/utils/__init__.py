"""Utility functions for bucket-cache"""

from .output import console, format_size, print_error, print_info
from .process import CommandResult, CommandRunner, run_command

__all__ = [
    "console",
    "format_size",
    "print_error",
    "print_info",
    "CommandResult",
    "CommandRunner",
    "run_command",
]
