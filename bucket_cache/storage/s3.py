"""AWS S3 (and S3-compatible) storage backend"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Dict, Any, Callable

from .base import StorageBackend
from ..api.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3Storage(StorageBackend):
    """AWS S3 storage implementation"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize S3 storage

        Args:
            config: S3 configuration including:
                - bucket: S3 bucket name
                - region: AWS region
                - endpoint: Custom endpoint (for S3-compatible services)
                - access_key: AWS access key ID
                - secret_key: AWS secret access key
        """
        super().__init__(config)
        self.client = None
        self.bucket = self.config.get('bucket')
        if not self.bucket:
            raise ValueError("S3 storage requires 'bucket'")

    async def _do_initialize(self) -> None:
        """Create the S3 client"""
        try:
            import boto3
        except ImportError:
            raise RuntimeError(
                "S3 storage backend requires 'boto3' package. "
                "Install with: pip install boto3"
            )

        self.client = boto3.client(
            "s3",
            region_name=self.config.get('region'),
            endpoint_url=self.config.get('endpoint'),
            aws_access_key_id=self.config.get('access_key'),
            aws_secret_access_key=self.config.get('secret_key')
        )

    async def _run(self, func, *args):
        # boto3 is synchronous
        return await asyncio.get_event_loop().run_in_executor(None, func, *args)

    async def upload(self,
                     local_path: Path,
                     remote_path: str,
                     metadata: Optional[Dict[str, str]] = None,
                     callback: Optional[Callable[[int, int], None]] = None) -> bool:
        """Upload file to S3"""
        try:
            await self.initialize()

            local_path = Path(local_path)
            file_size = local_path.stat().st_size
            transferred = 0

            def _progress(chunk: int):
                nonlocal transferred
                transferred += chunk
                if callback:
                    callback(transferred, file_size)

            def _upload():
                self.client.upload_file(
                    str(local_path),
                    self.bucket,
                    remote_path,
                    ExtraArgs={"Metadata": dict(metadata or {})},
                    Callback=_progress
                )
                return True

            return await self._run(_upload)

        except Exception as e:
            logger.error(f"S3 upload failed: {e}")
            return False

    async def download(self,
                       remote_path: str,
                       local_path: Path,
                       callback: Optional[Callable[[int, int], None]] = None) -> bool:
        """Download file from S3"""
        try:
            await self.initialize()

            local_path = Path(local_path)
            local_path.parent.mkdir(parents=True, exist_ok=True)
            transferred = 0

            def _download():
                file_size = self.client.head_object(Bucket=self.bucket, Key=remote_path)["ContentLength"]

                def _progress(chunk: int):
                    nonlocal transferred
                    transferred += chunk
                    if callback:
                        callback(transferred, file_size)

                self.client.download_file(self.bucket, remote_path, str(local_path), Callback=_progress)
                return True

            return await self._run(_download)

        except Exception as e:
            logger.error(f"S3 download failed: {e}")
            return False

    async def exists(self, remote_path: str) -> bool:
        """Check if object exists in S3"""
        return await self.get_metadata(remote_path) is not None

    async def delete(self, remote_path: str) -> bool:
        """Delete object from S3"""
        try:
            await self.initialize()

            def _delete():
                self.client.delete_object(Bucket=self.bucket, Key=remote_path)
                return True

            return await self._run(_delete)

        except Exception as e:
            logger.error(f"S3 delete failed: {e}")
            return False

    async def list(self, prefix: str = "") -> List[str]:
        """List object keys in S3 with prefix"""
        try:
            await self.initialize()

            def _list():
                keys = []
                paginator = self.client.get_paginator("list_objects_v2")
                for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                    for obj in page.get("Contents", []):
                        keys.append(obj["Key"])
                return keys

            return sorted(await self._run(_list))

        except Exception as e:
            logger.error(f"S3 list failed: {e}")
            raise StorageError(f"Failed to list s3://{self.bucket}/{prefix}*: {e}") from e

    async def get_metadata(self, remote_path: str) -> Optional[Dict[str, Any]]:
        """Get object metadata from S3"""
        from botocore.exceptions import ClientError

        await self.initialize()

        def _head():
            try:
                return self.client.head_object(Bucket=self.bucket, Key=remote_path)
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                    return None
                raise

        response = await self._run(_head)
        if response is None:
            return None

        return {
            'path': remote_path,
            'size': response.get("ContentLength", 0),
            'last_modified': response.get("LastModified"),
            'etag': response.get("ETag", "").strip('"'),
            'metadata': dict(response.get("Metadata") or {}),
        }
