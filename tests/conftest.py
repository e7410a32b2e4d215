"""Shared fixtures for bucket-cache tests"""

import os
import shutil

import pytest

from bucket_cache.utils.process import CommandResult, run_command

ZSTD_OUTPUT = "*** zstd command line interface 64-bits v{version}, by Yann Collet ***"
LZ4_OUTPUT = "*** LZ4 command line interface 64-bits v1.9.3, by Yann Collet ***"

requires_tar = pytest.mark.skipif(shutil.which("tar") is None, reason="tar not installed")
requires_zstd = pytest.mark.skipif(shutil.which("zstd") is None, reason="zstd not installed")
requires_lz4 = pytest.mark.skipif(shutil.which("lz4") is None, reason="lz4 not installed")


class FakeRunner:
    """
    Command runner returning canned results per program name

    Programs without a canned response behave like a missing binary.
    With passthrough=True they run for real instead.
    """

    def __init__(self, responses=None, passthrough=False):
        self.responses = dict(responses or {})
        self.passthrough = passthrough
        self.calls = []

    async def __call__(self, args, cwd=None, timeout=None):
        self.calls.append(list(args))
        program = args[0]

        if program not in self.responses:
            if self.passthrough:
                return await run_command(args, cwd=cwd, timeout=timeout)
            raise FileNotFoundError(f"No such file or directory: '{program}'")

        response = self.responses[program]
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, str):
            return CommandResult(exit_code=0, stdout=response)
        return response

    def programs(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances"""
    return FakeRunner


@pytest.fixture(autouse=True)
def clean_action_env(monkeypatch):
    """Keep the host's CI environment out of the tests"""
    for name in list(os.environ):
        if name.startswith("INPUT_"):
            monkeypatch.delenv(name, raising=False)
    for name in ("GITHUB_OUTPUT", "RUNNER_TEMP", "AWS_ENDPOINT_URL", "BOS_AK", "BOS_SK", "BOS_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source_tree(tmp_path):
    """Working directory with a small tree to cache"""
    work = tmp_path / "work"
    (work / "deps" / "nested").mkdir(parents=True)
    (work / "deps" / "a.txt").write_text("alpha\n")
    (work / "deps" / "nested" / "b.bin").write_bytes(bytes(range(256)) * 64)
    (work / "build.log").write_text("log line\n" * 100)
    return work


def snapshot(root):
    """Relative path -> bytes for every file under root"""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
