# bucket_cache/core/compression/probe.py
"""Compression tool probing"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from packaging.version import InvalidVersion, Version

from ...constants import (
    LZ4_SIGNATURE,
    PROBE_TIMEOUT,
    TOOL_VERSION_PATTERN,
    ZSTD_SIGNATURE,
)
from ...utils.process import CommandRunner, run_command

logger = logging.getLogger(__name__)

TOOL_SIGNATURES = {
    "lz4": LZ4_SIGNATURE,
    "zstd": ZSTD_SIGNATURE,
}


@dataclass(frozen=True)
class ProbeResult:
    """Availability of one compression binary"""
    tool: str
    available: bool
    version: Optional[Version] = None
    output: str = ""

    @classmethod
    def unavailable(cls, tool: str) -> "ProbeResult":
        return cls(tool=tool, available=False)


def parse_version(text: str) -> Optional[Version]:
    """
    Extract the first ``v<major>(.<minor>)*`` token from tool output

    Args:
        text: Output of ``<tool> --version``

    Returns:
        Parsed version, or None when no usable token is present
    """
    match = TOOL_VERSION_PATTERN.search(text or "")
    if not match:
        return None
    try:
        return Version(match.group(1))
    except InvalidVersion:
        return None


async def probe_tool(tool: str,
                     runner: Optional[CommandRunner] = None,
                     timeout: float = PROBE_TIMEOUT) -> ProbeResult:
    """
    Probe a compression binary with ``<tool> --version``

    Every failure (missing binary, non-zero exit, timeout, unexpected
    output, any other runner error) collapses into an unavailable result.
    Cancellation still propagates.

    Args:
        tool: Binary name, one of TOOL_SIGNATURES
        runner: Command runner, defaults to run_command
        timeout: Seconds to wait for the probe

    Returns:
        ProbeResult for the tool
    """
    runner = runner or run_command
    signature = TOOL_SIGNATURES[tool]

    try:
        result = await runner([tool, "--version"], timeout=timeout)
    except Exception as e:
        logger.debug("Probe for %s failed: %s", tool, e)
        return ProbeResult.unavailable(tool)

    if not result.ok:
        logger.debug("Probe for %s exited with %s", tool, result.exit_code)
        return ProbeResult.unavailable(tool)

    output = result.stdout.strip()
    if signature not in output.lower():
        logger.debug("Probe for %s returned unexpected output: %r", tool, output)
        return ProbeResult.unavailable(tool)

    return ProbeResult(
        tool=tool,
        available=True,
        version=parse_version(output),
        output=output
    )


async def probe_all(runner: Optional[CommandRunner] = None) -> Dict[str, ProbeResult]:
    """Probe every known compression binary, one after another"""
    results = {}
    for tool in TOOL_SIGNATURES:
        results[tool] = await probe_tool(tool, runner)
    return results
