"""Baidu Object Storage (BOS) backend implementation"""

import asyncio
import logging
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import List, Optional, Dict, Any, Callable

from .base import StorageBackend
from ..api.exceptions import StorageError

logger = logging.getLogger(__name__)

BOS_META_PREFIX = "x-bce-meta-"
# Header names as rewritten by the SDK when under_line_headers is enabled
BOS_UNDERLINED_META_PREFIX = "bce_meta_"


class BOSStorage(StorageBackend):
    """Baidu Object Storage implementation"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize BOS storage

        Args:
            config: BOS configuration including:
                - access_key: Access key
                - secret_key: Secret key
                - bucket: Bucket name
                - endpoint: BOS endpoint
        """
        super().__init__(config)
        self.client = None
        self.bucket = self.config.get('bucket')
        self.endpoint = self.config.get('endpoint') or 'https://bj.bcebos.com'
        if not self.bucket:
            raise ValueError("BOS storage requires 'bucket'")

    async def _do_initialize(self) -> None:
        """Initialize BOS connection"""
        try:
            from baidubce.services.bos.bos_client import BosClient
            from baidubce.bce_client_configuration import BceClientConfiguration
            from baidubce.auth.bce_credentials import BceCredentials
        except ImportError:
            raise RuntimeError(
                "BOS storage backend requires 'bce-python-sdk' package. "
                "Install with: pip install bce-python-sdk"
            )

        try:
            bos_config = BceClientConfiguration(
                credentials=BceCredentials(
                    self.config.get('access_key'),
                    self.config.get('secret_key')
                ),
                endpoint=self.endpoint
            )
            self.client = BosClient(bos_config)

            bucket_exists = self.client.does_bucket_exist(self.bucket)

        except Exception as e:
            raise StorageError(f"Failed to initialize BOS storage: {e}") from e

        if not bucket_exists:
            raise StorageError(f"BOS bucket not found: {self.bucket}")

    async def _run(self, func, *args):
        # BOS SDK is synchronous
        return await asyncio.get_event_loop().run_in_executor(None, func, *args)

    async def upload(self,
                     local_path: Path,
                     remote_path: str,
                     metadata: Optional[Dict[str, str]] = None,
                     callback: Optional[Callable[[int, int], None]] = None) -> bool:
        """Upload file to BOS"""
        try:
            await self.initialize()

            local_path = Path(local_path)
            file_size = local_path.stat().st_size

            def _upload():
                self.client.put_object_from_file(
                    self.bucket,
                    remote_path,
                    str(local_path),
                    user_metadata=dict(metadata or {})
                )
                if callback:
                    callback(file_size, file_size)
                return True

            return await self._run(_upload)

        except Exception as e:
            logger.error(f"BOS upload failed: {e}")
            return False

    async def download(self,
                       remote_path: str,
                       local_path: Path,
                       callback: Optional[Callable[[int, int], None]] = None) -> bool:
        """Download file from BOS"""
        try:
            await self.initialize()

            local_path = Path(local_path)
            local_path.parent.mkdir(parents=True, exist_ok=True)

            def _download():
                self.client.get_object_to_file(self.bucket, remote_path, str(local_path))
                if callback:
                    size = local_path.stat().st_size
                    callback(size, size)
                return True

            return await self._run(_download)

        except Exception as e:
            logger.error(f"BOS download failed: {e}")
            return False

    async def exists(self, remote_path: str) -> bool:
        """Check if file exists in BOS"""
        return await self.get_metadata(remote_path) is not None

    async def delete(self, remote_path: str) -> bool:
        """Delete file from BOS"""
        try:
            await self.initialize()

            def _delete():
                self.client.delete_object(self.bucket, remote_path)
                return True

            return await self._run(_delete)

        except Exception as e:
            logger.error(f"BOS delete failed: {e}")
            return False

    async def list(self, prefix: str = "") -> List[str]:
        """List files in BOS with prefix"""
        try:
            await self.initialize()

            def _list():
                files = []
                marker = None

                while True:
                    response = self.client.list_objects(
                        self.bucket,
                        prefix=prefix,
                        marker=marker,
                        max_keys=1000
                    )

                    for obj in response.contents:
                        files.append(obj.key)

                    if response.is_truncated:
                        marker = response.next_marker
                    else:
                        break

                return files

            return sorted(await self._run(_list))

        except StorageError:
            raise
        except Exception as e:
            logger.error(f"BOS list failed: {e}")
            raise StorageError(f"Failed to list {self.bucket}/{prefix}*: {e}") from e

    async def get_metadata(self, remote_path: str) -> Optional[Dict[str, Any]]:
        """Get file metadata from BOS, None when the object is missing"""
        from baidubce.exception import BceHttpClientError

        await self.initialize()

        def _get_metadata():
            try:
                meta = self.client.get_object_meta_data(self.bucket, remote_path)
            except BceHttpClientError as e:
                if getattr(getattr(e, 'last_error', None), 'status_code', None) == 404:
                    return None
                raise

            return self._parse_object_meta(remote_path, vars(meta.metadata))

        return await self._run(_get_metadata)

    @staticmethod
    def _parse_object_meta(remote_path: str, headers: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build the metadata dict from response headers

        The SDK stores headers either verbatim (``x-bce-meta-foo``,
        ``content-length``) or, with under_line_headers enabled, as
        attribute names (``bce_meta_foo``, ``content_length``). Both forms
        are accepted; underlined user metadata keys get their hyphens back.
        """
        headers = {k.lower(): v for k, v in headers.items()}

        def _header(name):
            value = headers.get(name)
            if value is None:
                value = headers.get(name.replace('-', '_'))
            return value

        user_metadata = {}
        for key, value in headers.items():
            if key.startswith(BOS_META_PREFIX):
                user_metadata[key[len(BOS_META_PREFIX):]] = value
            elif key.startswith(BOS_UNDERLINED_META_PREFIX):
                user_metadata[key[len(BOS_UNDERLINED_META_PREFIX):].replace('_', '-')] = value

        last_modified = _header('last-modified')

        return {
            'path': remote_path,
            'size': int(_header('content-length') or 0),
            'last_modified': parsedate_to_datetime(last_modified) if last_modified else None,
            'etag': (_header('etag') or '').strip('"'),
            'metadata': user_metadata,
        }
