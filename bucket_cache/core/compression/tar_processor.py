# bucket_cache/core/compression/tar_processor.py
"""Tar archive creation and extraction through the system tar binary"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .method import CompressionMethod
from .negotiator import select_compression_method
from ...api.exceptions import ArchiveCreationError, ArchiveExtractionError
from ...constants import MSG_DETECTED_METHOD, MSG_USING_METHOD
from ...utils.output import print_info
from ...utils.process import CommandRunner, run_command

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TarProcessor:
    """
    Creates and extracts cache archives with ``tar``

    Creation negotiates the compression method from the tools installed
    on this host. Extraction takes the method recorded when the archive
    was created and never probes.
    """

    def __init__(self,
                 runner: Optional[CommandRunner] = None,
                 platform: str = sys.platform,
                 preference: Optional[CompressionMethod] = None):
        """
        Initialize tar processor

        Args:
            runner: Command runner, defaults to run_command
            platform: Host platform identifier
            preference: Configured compression preference
        """
        self.runner = runner or run_command
        self.platform = platform
        self.preference = preference

    @staticmethod
    def build_create_command(archive_path: PathLike,
                             source_paths: Sequence[str],
                             working_dir: PathLike,
                             method: CompressionMethod) -> List[str]:
        """Argument vector for creating an archive"""
        return [
            "tar",
            "-c",
            *method.compression_args(),
            "--posix",
            "-P",
            "-f", str(archive_path),
            "-C", str(working_dir),
            *[str(p) for p in source_paths],
        ]

    @staticmethod
    def build_extract_command(archive_path: PathLike,
                              working_dir: PathLike,
                              method: CompressionMethod) -> List[str]:
        """Argument vector for extracting an archive"""
        return [
            "tar",
            "-x",
            *method.decompression_args(),
            "-P",
            "-f", str(archive_path),
            "-C", str(working_dir),
        ]

    async def select_method(self) -> CompressionMethod:
        """Negotiate the compression method for this host"""
        return await select_compression_method(self.platform, self.preference, self.runner)

    async def create_archive(self,
                             archive_path: PathLike,
                             source_paths: Sequence[str],
                             working_dir: PathLike) -> CompressionMethod:
        """
        Create a POSIX tar archive of source_paths

        Args:
            archive_path: Archive file to write
            source_paths: Paths to include, relative to working_dir
            working_dir: Directory tar changes into before adding paths

        Returns:
            Compression method the archive was written with

        Raises:
            ArchiveCreationError: If tar exits with a non-zero code
        """
        method = await self.select_method()
        print_info(MSG_USING_METHOD.format(method=method))

        command = self.build_create_command(archive_path, source_paths, working_dir, method)
        result = await self.runner(command)
        if not result.ok:
            logger.error("tar create failed with exit code %s", result.exit_code)
            raise ArchiveCreationError(result.exit_code, result.output)

        return method

    async def extract_archive(self,
                              archive_path: PathLike,
                              method: Union[CompressionMethod, str],
                              working_dir: PathLike) -> None:
        """
        Extract an archive into working_dir

        Args:
            archive_path: Archive file to read
            method: Method (or persisted tag) used to create the archive
            working_dir: Directory to extract into

        Raises:
            UnknownCompressionMethodError: If method is not a known tag
            ArchiveExtractionError: If tar exits with a non-zero code
        """
        method = CompressionMethod.from_tag(method)
        print_info(MSG_DETECTED_METHOD.format(method=method))

        command = self.build_extract_command(archive_path, working_dir, method)
        result = await self.runner(command)
        if not result.ok:
            logger.error("tar extract failed with exit code %s", result.exit_code)
            raise ArchiveExtractionError(result.exit_code, result.output)
