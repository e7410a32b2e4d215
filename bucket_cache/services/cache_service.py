"""Cache save and restore service"""

import logging
import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

from ..api.exceptions import CacheNotFoundError, StorageError
from ..constants import (
    ENV_RUNNER_TEMP,
    METADATA_COMPRESSION_METHOD,
    MSG_CACHE_EXISTS,
    MSG_CACHE_MISS,
    MSG_CACHE_RESTORED,
    MSG_CACHE_SAVED,
    OUTPUT_CACHE_HIT,
    OUTPUT_MATCHED_KEY,
)
from ..core.action_io import set_output
from ..core.compression import CompressionMethod, TarProcessor
from ..models.config import CacheConfig
from ..models.result import RestoreResult, SaveResult
from ..storage.base import StorageBackend
from ..storage.factory import StorageFactory
from ..utils.output import format_size, print_info

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class CacheService:
    """Saves directories to, and restores them from, object storage"""

    def __init__(self,
                 config: CacheConfig,
                 storage: Optional[StorageBackend] = None,
                 tar_processor: Optional[TarProcessor] = None):
        """
        Initialize cache service

        Args:
            config: Cache configuration
            storage: Storage backend, created from config when omitted
            tar_processor: Tar processor, created from config when omitted
        """
        self.config = config
        self.storage = storage or StorageFactory.create_from_config(config)
        self.tar_processor = tar_processor or TarProcessor(preference=config.compression_method)

    @staticmethod
    def _temp_dir() -> tempfile.TemporaryDirectory:
        return tempfile.TemporaryDirectory(prefix="bucket-cache-", dir=os.environ.get(ENV_RUNNER_TEMP))

    async def save(self) -> SaveResult:
        """
        Archive the configured paths and upload them under the primary key

        Returns:
            SaveResult; ``saved`` is False when the key already existed

        Raises:
            ArchiveCreationError: If tar fails
            StorageError: If the upload fails
        """
        start_time = time.time()
        paths = self.config.require_paths()
        object_key = self.config.object_key

        async with self.storage:
            if await self.storage.exists(object_key):
                print_info(MSG_CACHE_EXISTS.format(key=self.config.key))
                return SaveResult(key=self.config.key, object_key=object_key, saved=False)

            with self._temp_dir() as temp_dir:
                archive_path = Path(temp_dir) / self.config.key_file_name

                method = await self.tar_processor.create_archive(
                    archive_path,
                    paths,
                    self.config.working_dir
                )
                archive_size = archive_path.stat().st_size
                logger.info("Created archive %s (%s)", archive_path, format_size(archive_size))

                uploaded = await self.storage.upload(
                    archive_path,
                    object_key,
                    metadata={METADATA_COMPRESSION_METHOD: method.value}
                )
                if not uploaded:
                    raise StorageError(f"Failed to upload cache to {self.config.bucket}/{object_key}")

        print_info(MSG_CACHE_SAVED.format(key=self.config.key, size=format_size(archive_size)))

        return SaveResult(
            key=self.config.key,
            object_key=object_key,
            saved=True,
            compression_method=method,
            archive_size=archive_size,
            duration=time.time() - start_time
        )

    async def find_cache(self) -> Optional[Tuple[str, str]]:
        """
        Resolve the cache object to restore

        The primary key is tried first; each restore key is then used as a
        prefix and the most recently modified archive under it wins.

        Returns:
            (matched_key, object_key), or None on a miss
        """
        object_key = self.config.object_key
        if await self.storage.exists(object_key):
            return self.config.key, object_key

        suffix = "/" + self.config.key_file_name
        for restore_key in self.config.restore_keys:
            candidates = [k for k in await self.storage.list(restore_key) if k.endswith(suffix)]
            if not candidates:
                logger.debug("No cache under restore key %s", restore_key)
                continue

            newest, newest_time = None, _EPOCH
            for candidate in candidates:
                meta = await self.storage.get_metadata(candidate)
                modified = (meta or {}).get('last_modified') or _EPOCH
                if newest is None or modified > newest_time:
                    newest, newest_time = candidate, modified

            return newest[:-len(suffix)], newest

        return None

    async def restore(self) -> RestoreResult:
        """
        Download and extract the best matching cache

        Returns:
            RestoreResult; ``matched_key`` is None on a miss

        Raises:
            CacheNotFoundError: On a miss when fail_on_cache_miss is set
            UnknownCompressionMethodError: If the object's method tag is missing or unknown
            ArchiveExtractionError: If tar fails
            StorageError: If the download fails
        """
        start_time = time.time()

        async with self.storage:
            match = await self.find_cache()
            if match is None:
                print_info(MSG_CACHE_MISS.format(key=self.config.key))
                if self.config.fail_on_cache_miss:
                    raise CacheNotFoundError(self.config.key)
                return RestoreResult(key=self.config.key)

            matched_key, object_key = match
            meta = await self.storage.get_metadata(object_key) or {}
            method = CompressionMethod.from_tag(
                (meta.get('metadata') or {}).get(METADATA_COMPRESSION_METHOD)
            )

            with self._temp_dir() as temp_dir:
                archive_path = Path(temp_dir) / self.config.key_file_name

                if not await self.storage.download(object_key, archive_path):
                    raise StorageError(f"Failed to download cache from {self.config.bucket}/{object_key}")
                archive_size = archive_path.stat().st_size

                Path(self.config.working_dir).mkdir(parents=True, exist_ok=True)
                await self.tar_processor.extract_archive(archive_path, method, self.config.working_dir)

        print_info(MSG_CACHE_RESTORED.format(key=matched_key))

        return RestoreResult(
            key=self.config.key,
            matched_key=matched_key,
            compression_method=method,
            archive_size=archive_size,
            duration=time.time() - start_time
        )


def write_restore_outputs(result: RestoreResult) -> None:
    """Publish restore outputs for later workflow steps"""
    set_output(OUTPUT_CACHE_HIT, result.cache_hit)
    set_output(OUTPUT_MATCHED_KEY, result.matched_key or "")
