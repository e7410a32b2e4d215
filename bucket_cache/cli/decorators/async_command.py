# bucket_cache/cli/decorators/async_command.py
"""Run coroutine commands from click"""

import asyncio
import functools
from typing import Callable


def async_command(func: Callable) -> Callable:
    """
    Decorator that lets a click command be written as a coroutine

    Example:
        @click.command()
        @async_command
        async def save(...):
            await service.save()
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))

    return wrapper
