"""External command execution"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence, Union

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured result of a finished process"""
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """Combined diagnostic output, stderr first"""
        parts = [p.strip() for p in (self.stderr, self.stdout) if p and p.strip()]
        return "\n".join(parts)


CommandRunner = Callable[..., Awaitable[CommandResult]]


async def run_command(args: Sequence[str],
                      cwd: Optional[Union[str, Path]] = None,
                      timeout: Optional[float] = None) -> CommandResult:
    """
    Run a command to completion and capture its output

    stdin is closed and both output streams are captured, nothing is
    forwarded to the calling process.

    Args:
        args: Program name followed by its arguments
        cwd: Working directory for the process
        timeout: Seconds to wait before killing the process

    Returns:
        CommandResult of the finished process

    Raises:
        OSError: If the executable cannot be started
        asyncio.TimeoutError: If the timeout expires
    """
    logger.debug("Running: %s", " ".join(args))

    process = await asyncio.create_subprocess_exec(
        *args,
        cwd=str(cwd) if cwd else None,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE
    )

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise

    return CommandResult(
        exit_code=process.returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace")
    )
