"""Tests for the BOS storage backend against a stubbed BOS endpoint"""

import asyncio
import json
from datetime import datetime, timezone

import pytest
from baidubce import compat, utils
from baidubce.bce_response import BceResponse
from baidubce.exception import BceHttpClientError, BceServerError
from baidubce.http import bce_http_client

from bucket_cache.api.exceptions import StorageError
from bucket_cache.models.config import CacheConfig
from bucket_cache.services.cache_service import CacheService
from bucket_cache.storage import BOSStorage, StorageFactory

LAST_MODIFIED = "Wed, 14 Oct 2026 10:00:00 GMT"


def _not_found():
    return BceHttpClientError("Not Found", BceServerError("Not Found", status_code=404, code="NoSuchKey"))


class FakeBos:
    """
    In-memory BOS answering the SDK's HTTP layer

    Responses go through the SDK's own header handling, so metadata has
    the same shape as from a real endpoint.
    """

    def __init__(self, bucket="ci-cache", page_size=1000):
        self.bucket = bucket
        self.page_size = page_size
        self.objects = {}
        self.requests = []

    def put(self, key, data=b"archive", user_metadata=None):
        self.objects[key] = (data, dict(user_metadata or {}))

    def send_request(self, config, sign_function, response_handler_functions,
                     http_method, path, body, headers, params, use_backup_endpoint=False):
        method = compat.convert_to_string(http_method)
        parts = compat.convert_to_string(path).lstrip("/").split("/", 1)
        params = {compat.convert_to_string(k): v for k, v in (params or {}).items()}
        self.requests.append((method, parts, params))

        if parts[0] != self.bucket:
            raise _not_found()
        key = parts[1] if len(parts) > 1 else None

        if key is None and method == "HEAD":
            return BceResponse()
        if key is None and method == "GET":
            return self._list(params)
        if method == "PUT":
            return self._put(key, body, headers)
        if method == "HEAD":
            return self._head(key, config)
        raise AssertionError(f"unexpected request {method} {path}")

    def _put(self, key, body, headers):
        user_metadata = {}
        for name, value in headers.items():
            name = compat.convert_to_string(name)
            if name.startswith("x-bce-meta-"):
                user_metadata[name[len("x-bce-meta-"):]] = compat.convert_to_string(value)
        self.put(key, body.read(), user_metadata)
        return BceResponse()

    def _head(self, key, config):
        if key not in self.objects:
            raise _not_found()
        data, user_metadata = self.objects[key]
        headers = {
            "content-length": str(len(data)),
            "last-modified": LAST_MODIFIED,
            "etag": '"0cc175b9c0f1b6a831c399e269772661"',
        }
        headers.update({f"x-bce-meta-{k}": v for k, v in user_metadata.items()})

        response = BceResponse()
        if config.under_line_headers:
            response.set_metadata_from_headers(headers)
        else:
            response.set_metadata_from_headers_no_underlined(headers)
        return response

    def _list(self, params):
        prefix = compat.convert_to_string(params.get("prefix") or "")
        marker = compat.convert_to_string(params.get("marker") or "")
        keys = sorted(k for k in self.objects if k.startswith(prefix) and k > marker)
        page = keys[:self.page_size]
        truncated = len(keys) > len(page)

        body = {
            "name": self.bucket,
            "prefix": prefix,
            "marker": marker,
            "maxKeys": self.page_size,
            "isTruncated": truncated,
            "contents": [{"key": k, "size": len(self.objects[k][0])} for k in page],
        }
        if truncated:
            body["nextMarker"] = page[-1]

        response = BceResponse()
        parsed = json.loads(json.dumps(body), object_hook=utils.dict_to_python_object)
        response.__dict__.update(parsed.__dict__)
        return response


@pytest.fixture
def fake_bos(monkeypatch):
    bos = FakeBos()
    monkeypatch.setattr(bce_http_client, "send_request", bos.send_request)
    return bos


@pytest.fixture
def storage():
    return BOSStorage({
        "bucket": "ci-cache",
        "endpoint": "http://127.0.0.1:8080",
        "access_key": "ak",
        "secret_key": "sk",
    })


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / "cache.tar"
    path.write_bytes(b"\x04\x22\x4d\x18" + b"payload" * 100)
    return path


def test_requires_bucket():
    with pytest.raises(ValueError):
        BOSStorage({"endpoint": "http://127.0.0.1:8080"})


def test_missing_bucket_fails_initialization(fake_bos):
    storage = BOSStorage({"bucket": "other-bucket", "endpoint": "http://127.0.0.1:8080",
                          "access_key": "ak", "secret_key": "sk"})

    with pytest.raises(StorageError) as exc_info:
        asyncio.run(storage.initialize())

    assert "other-bucket" in str(exc_info.value)


def test_upload_sends_user_metadata(fake_bos, storage, archive):
    async def scenario():
        async with storage:
            return await storage.upload(archive, "deps-1/cache.tar", metadata={"compression-method": "zstd"})

    assert asyncio.run(scenario())
    assert fake_bos.objects["deps-1/cache.tar"] == (archive.read_bytes(), {"compression-method": "zstd"})


def test_get_metadata(fake_bos, storage):
    fake_bos.put("deps-1/cache.tar", b"x" * 42, {"compression-method": "zstd (without long)"})

    meta = asyncio.run(storage.get_metadata("deps-1/cache.tar"))

    assert meta["size"] == 42
    assert meta["last_modified"] == datetime(2026, 10, 14, 10, 0, tzinfo=timezone.utc)
    assert meta["etag"] == "0cc175b9c0f1b6a831c399e269772661"
    assert meta["metadata"] == {"compression-method": "zstd (without long)"}


def test_get_metadata_with_verbatim_headers(fake_bos, storage):
    fake_bos.put("deps-1/cache.tar", b"x" * 7, {"compression-method": "lz4"})

    async def scenario():
        await storage.initialize()
        storage.client.config.under_line_headers = False
        return await storage.get_metadata("deps-1/cache.tar")

    meta = asyncio.run(scenario())

    assert meta["size"] == 7
    assert meta["metadata"] == {"compression-method": "lz4"}


def test_missing_object(fake_bos, storage):
    async def scenario():
        return await storage.get_metadata("missing/cache.tar"), await storage.exists("missing/cache.tar")

    assert asyncio.run(scenario()) == (None, False)


def test_list_follows_markers(fake_bos, storage):
    fake_bos.page_size = 2
    for key in ("deps-1/cache.tar", "deps-2/cache.tar", "deps-3/cache.tar", "base/cache.tar"):
        fake_bos.put(key)

    keys = asyncio.run(storage.list("deps-"))

    assert keys == ["deps-1/cache.tar", "deps-2/cache.tar", "deps-3/cache.tar"]
    list_requests = [params for method, parts, params in fake_bos.requests if method == "GET"]
    assert len(list_requests) == 2


def test_list_failure_raises(fake_bos, storage):
    async def scenario():
        await storage.initialize()
        fake_bos.bucket = "gone"
        return await storage.list("deps-")

    with pytest.raises(StorageError):
        asyncio.run(scenario())


def test_restore_resolves_method_from_bos_metadata(fake_bos, fake_runner, tmp_path):
    from bucket_cache.core.compression import CompressionMethod, TarProcessor
    from bucket_cache.utils.process import CommandResult

    fake_bos.put("deps-old/cache.tar", b"archive", {"compression-method": "zstd"})
    config = CacheConfig(
        bucket="ci-cache",
        key="deps-new",
        restore_keys=["deps-"],
        storage_type="bos",
        endpoint="http://127.0.0.1:8080",
        access_key="ak",
        secret_key="sk",
        working_dir=str(tmp_path / "restored"),
    )
    storage = StorageFactory.create_from_config(config)

    async def fake_download(remote_path, local_path, callback=None):
        local_path.write_bytes(fake_bos.objects[remote_path][0])
        return True

    storage.download = fake_download
    runner = fake_runner({"tar": CommandResult(exit_code=0)})
    service = CacheService(config, storage=storage, tar_processor=TarProcessor(runner=runner))

    result = asyncio.run(service.restore())

    assert result.matched_key == "deps-old"
    assert result.compression_method is CompressionMethod.ZSTD
    assert runner.calls[0][:4] == ["tar", "-x", "--use-compress-program", "zstd -d --long=30"]
