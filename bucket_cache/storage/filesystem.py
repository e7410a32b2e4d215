"""Filesystem storage backend implementation"""

import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Dict, Any, Callable

import aiofiles

from .base import StorageBackend
from ..api.exceptions import StorageError
from ..constants import DEFAULT_CHUNK_SIZE, METADATA_SIDECAR_SUFFIX

logger = logging.getLogger(__name__)


class FileSystemStorage(StorageBackend):
    """
    Local directory storage

    The bucket is a directory; user metadata lives in a JSON sidecar next
    to each object.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize filesystem storage

        Args:
            config: Configuration including:
                - path: Root directory of the bucket
        """
        super().__init__(config)
        base_path = self.config.get('path') or self.config.get('bucket')
        if not base_path:
            raise ValueError("Filesystem storage requires 'path'")
        self.base_path = Path(base_path)

    async def _do_initialize(self) -> None:
        """Ensure the bucket directory exists"""
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, remote_path: str) -> Path:
        return self.base_path / remote_path.lstrip("/")

    def _get_sidecar_path(self, remote_path: str) -> Path:
        full_path = self._get_full_path(remote_path)
        return full_path.with_name(full_path.name + METADATA_SIDECAR_SUFFIX)

    async def _copy(self,
                    source: Path,
                    target: Path,
                    callback: Optional[Callable[[int, int], None]]) -> None:
        total_size = source.stat().st_size
        bytes_transferred = 0

        async with aiofiles.open(source, 'rb') as src:
            async with aiofiles.open(target, 'wb') as dst:
                while True:
                    chunk = await src.read(DEFAULT_CHUNK_SIZE)
                    if not chunk:
                        break

                    await dst.write(chunk)
                    bytes_transferred += len(chunk)

                    if callback:
                        callback(bytes_transferred, total_size)

    async def upload(self,
                     local_path: Path,
                     remote_path: str,
                     metadata: Optional[Dict[str, str]] = None,
                     callback: Optional[Callable[[int, int], None]] = None) -> bool:
        """Copy file into the bucket directory"""
        try:
            await self.initialize()

            local_path = Path(local_path)
            if not local_path.exists():
                return False

            full_path = self._get_full_path(remote_path)
            full_path.parent.mkdir(parents=True, exist_ok=True)

            await self._copy(local_path, full_path, callback)

            sidecar = self._get_sidecar_path(remote_path)
            async with aiofiles.open(sidecar, 'w', encoding='utf-8') as f:
                await f.write(json.dumps(metadata or {}))

            return True

        except Exception as e:
            logger.error(f"Upload failed: {e}")
            return False

    async def download(self,
                       remote_path: str,
                       local_path: Path,
                       callback: Optional[Callable[[int, int], None]] = None) -> bool:
        """Copy file out of the bucket directory"""
        try:
            await self.initialize()

            full_path = self._get_full_path(remote_path)
            if not full_path.is_file():
                return False

            local_path = Path(local_path)
            local_path.parent.mkdir(parents=True, exist_ok=True)

            await self._copy(full_path, local_path, callback)
            return True

        except Exception as e:
            logger.error(f"Download failed: {e}")
            return False

    async def exists(self, remote_path: str) -> bool:
        """Check if file exists"""
        await self.initialize()
        return self._get_full_path(remote_path).is_file()

    async def delete(self, remote_path: str) -> bool:
        """Delete file and its metadata"""
        try:
            await self.initialize()
            full_path = self._get_full_path(remote_path)

            if full_path.exists():
                if full_path.is_dir():
                    shutil.rmtree(full_path)
                else:
                    full_path.unlink()
                    sidecar = self._get_sidecar_path(remote_path)
                    if sidecar.exists():
                        sidecar.unlink()
                return True

            return False

        except Exception as e:
            logger.error(f"Delete failed: {e}")
            return False

    async def list(self, prefix: str = "") -> List[str]:
        """List object keys starting with prefix"""
        await self.initialize()

        results = []
        try:
            for item in self.base_path.rglob("*"):
                if not item.is_file() or item.name.endswith(METADATA_SIDECAR_SUFFIX):
                    continue
                relative = item.relative_to(self.base_path).as_posix()
                if relative.startswith(prefix):
                    results.append(relative)
        except OSError as e:
            raise StorageError(f"Failed to list {self.base_path}: {e}") from e

        return sorted(results)

    async def get_metadata(self, remote_path: str) -> Optional[Dict[str, Any]]:
        """Get file metadata"""
        await self.initialize()

        full_path = self._get_full_path(remote_path)
        if not full_path.is_file():
            return None

        stat = full_path.stat()

        user_metadata = {}
        sidecar = self._get_sidecar_path(remote_path)
        if sidecar.exists():
            async with aiofiles.open(sidecar, 'r', encoding='utf-8') as f:
                user_metadata = json.loads(await f.read() or "{}")

        return {
            'path': remote_path,
            'size': stat.st_size,
            'last_modified': datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            'metadata': user_metadata,
        }
