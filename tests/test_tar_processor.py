"""Tests for tar archive creation and extraction"""

import asyncio
import tarfile

import pytest

from bucket_cache.api.exceptions import (
    ArchiveCreationError,
    ArchiveExtractionError,
    UnknownCompressionMethodError,
)
from bucket_cache.core.compression import CompressionMethod, TarProcessor
from bucket_cache.utils.process import CommandResult

from conftest import (
    LZ4_OUTPUT,
    ZSTD_OUTPUT,
    requires_lz4,
    requires_tar,
    requires_zstd,
    snapshot,
)


def test_build_create_command():
    command = TarProcessor.build_create_command(
        "/tmp/cache.tar", ["deps", "build.log"], "/work", CompressionMethod.ZSTD
    )

    assert command == [
        "tar", "-c", "--use-compress-program", "zstd -T0 --long=30",
        "--posix", "-P", "-f", "/tmp/cache.tar", "-C", "/work", "deps", "build.log",
    ]


def test_build_extract_command():
    command = TarProcessor.build_extract_command("/tmp/cache.tar", "/work", CompressionMethod.LZ4)

    assert command == [
        "tar", "-x", "--use-compress-program", "lz4 -d", "-P", "-f", "/tmp/cache.tar", "-C", "/work",
    ]


def test_create_archive_returns_negotiated_method(fake_runner):
    runner = fake_runner({
        "lz4": LZ4_OUTPUT,
        "tar": CommandResult(exit_code=0),
    })
    processor = TarProcessor(runner=runner, platform="linux", preference=CompressionMethod.LZ4)

    method = asyncio.run(processor.create_archive("/tmp/a.tar", ["deps"], "/work"))

    assert method is CompressionMethod.LZ4
    assert runner.calls[-1][:4] == ["tar", "-c", "--use-compress-program", "lz4 --fast -BD"]


def test_create_archive_failure_carries_exit_code_and_output(fake_runner):
    runner = fake_runner({
        "tar": CommandResult(exit_code=2, stderr="tar: deps: Cannot stat: No such file or directory"),
    })
    processor = TarProcessor(runner=runner, platform="linux")

    with pytest.raises(ArchiveCreationError) as exc_info:
        asyncio.run(processor.create_archive("/tmp/a.tar", ["deps"], "/work"))

    assert exc_info.value.exit_code == 2
    assert exc_info.value.output == "tar: deps: Cannot stat: No such file or directory"
    assert "Cannot stat" in str(exc_info.value)


def test_extract_archive_uses_recorded_method_without_probing(fake_runner):
    runner = fake_runner({"tar": CommandResult(exit_code=0)})
    processor = TarProcessor(runner=runner, platform="linux")

    asyncio.run(processor.extract_archive("/tmp/a.tar", "zstd", "/work"))

    assert runner.calls == [[
        "tar", "-x", "--use-compress-program", "zstd -d --long=30", "-P", "-f", "/tmp/a.tar", "-C", "/work",
    ]]


def test_extract_archive_rejects_unknown_tag(fake_runner):
    runner = fake_runner({"tar": CommandResult(exit_code=0)})
    processor = TarProcessor(runner=runner, platform="linux")

    with pytest.raises(UnknownCompressionMethodError):
        asyncio.run(processor.extract_archive("/tmp/a.tar", "zstd-long", "/work"))

    assert runner.calls == []


def test_extract_archive_failure(fake_runner):
    runner = fake_runner({"tar": CommandResult(exit_code=2, stderr="gzip: stdin: not in gzip format")})
    processor = TarProcessor(runner=runner, platform="linux")

    with pytest.raises(ArchiveExtractionError) as exc_info:
        asyncio.run(processor.extract_archive("/tmp/a.tar", CompressionMethod.GZIP, "/work"))

    assert exc_info.value.exit_code == 2
    assert "not in gzip format" in exc_info.value.output


def _processor_for(method, fake_runner):
    """TarProcessor whose negotiation lands on method while tar runs for real"""
    probes = {
        CompressionMethod.GZIP: ({}, CompressionMethod.GZIP),
        CompressionMethod.ZSTD_WITHOUT_LONG: ({"zstd": ZSTD_OUTPUT.format(version="1.3.1")}, None),
        CompressionMethod.ZSTD: ({"zstd": ZSTD_OUTPUT.format(version="1.5.0")}, None),
        CompressionMethod.LZ4: ({"lz4": LZ4_OUTPUT}, CompressionMethod.LZ4),
    }
    responses, preference = probes[method]
    runner = fake_runner(responses, passthrough=True)
    return TarProcessor(runner=runner, platform="linux", preference=preference)


@requires_tar
@pytest.mark.parametrize("method", [
    CompressionMethod.GZIP,
    pytest.param(CompressionMethod.ZSTD_WITHOUT_LONG, marks=requires_zstd),
    pytest.param(CompressionMethod.ZSTD, marks=requires_zstd),
    pytest.param(CompressionMethod.LZ4, marks=requires_lz4),
])
def test_round_trip(tmp_path, source_tree, fake_runner, method):
    archive = tmp_path / "cache.tar"
    restored = tmp_path / "restored"
    restored.mkdir()
    processor = _processor_for(method, fake_runner)

    used = asyncio.run(processor.create_archive(archive, ["deps", "build.log"], source_tree))
    asyncio.run(processor.extract_archive(archive, used, restored))

    assert used is method
    assert snapshot(restored) == snapshot(source_tree)


@requires_tar
def test_missing_source_path_fails_creation(tmp_path, source_tree):
    processor = TarProcessor(preference=CompressionMethod.GZIP)

    with pytest.raises(ArchiveCreationError) as exc_info:
        asyncio.run(processor.create_archive(tmp_path / "cache.tar", ["does-not-exist"], source_tree))

    assert exc_info.value.exit_code != 0
    assert "does-not-exist" in exc_info.value.output


@requires_tar
def test_mismatched_method_is_a_decode_error(tmp_path, source_tree):
    archive = tmp_path / "plain.tar"
    with tarfile.open(archive, "w") as tar:
        tar.add(source_tree / "deps", arcname="deps")
    restored = tmp_path / "restored"
    restored.mkdir()

    with pytest.raises(ArchiveExtractionError) as exc_info:
        asyncio.run(TarProcessor().extract_archive(archive, CompressionMethod.GZIP, restored))

    assert exc_info.value.exit_code != 0


@requires_tar
@requires_zstd
def test_zstd_archive_extracted_as_gzip_fails(tmp_path, source_tree, fake_runner):
    archive = tmp_path / "cache.tar"
    restored = tmp_path / "restored"
    restored.mkdir()
    processor = _processor_for(CompressionMethod.ZSTD, fake_runner)
    asyncio.run(processor.create_archive(archive, ["deps"], source_tree))

    with pytest.raises(ArchiveExtractionError):
        asyncio.run(processor.extract_archive(archive, CompressionMethod.GZIP, restored))
