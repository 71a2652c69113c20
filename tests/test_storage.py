"""Tests for the file and in-memory storage backends."""

import pytest

from quallaa.storage import BASELINE_KEY, FileStorage, InMemoryStorage


class TestFileStorage:
    @pytest.mark.asyncio
    async def test_missing_key_reads_none(self, tmp_path):
        storage = FileStorage(tmp_path)
        assert await storage.read(BASELINE_KEY) is None
        assert await storage.exists(BASELINE_KEY) is False

    @pytest.mark.asyncio
    async def test_write_creates_state_directory(self, tmp_path):
        storage = FileStorage(tmp_path)
        await storage.write(BASELINE_KEY, b'{"a": 1}')
        path = tmp_path / ".quallaa" / "roi-baseline.json"
        assert path.read_bytes() == b'{"a": 1}'
        assert await storage.read(BASELINE_KEY) == b'{"a": 1}'
        assert await storage.exists(BASELINE_KEY) is True

    @pytest.mark.asyncio
    async def test_write_replaces_content(self, tmp_path):
        storage = FileStorage(tmp_path)
        await storage.write("roi-snapshots", b"[1]")
        await storage.write("roi-snapshots", b"[1, 2]")
        assert await storage.read("roi-snapshots") == b"[1, 2]"

    @pytest.mark.asyncio
    async def test_ensure_container_is_idempotent(self, tmp_path):
        storage = FileStorage(tmp_path)
        await storage.ensure_container(BASELINE_KEY)
        await storage.ensure_container(BASELINE_KEY)
        assert (tmp_path / ".quallaa").is_dir()

    @pytest.mark.asyncio
    async def test_os_errors_propagate(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.path_for(BASELINE_KEY).mkdir(parents=True)
        with pytest.raises(OSError):
            await storage.read(BASELINE_KEY)


class TestInMemoryStorage:
    @pytest.mark.asyncio
    async def test_read_write(self):
        storage = InMemoryStorage()
        assert await storage.read("k") is None
        await storage.write("k", b"v")
        assert await storage.read("k") == b"v"
        assert await storage.exists("k")

    @pytest.mark.asyncio
    async def test_initial_content(self):
        storage = InMemoryStorage({"k": b"seed"})
        assert await storage.read("k") == b"seed"

    @pytest.mark.asyncio
    async def test_instances_are_isolated(self):
        first, second = InMemoryStorage(), InMemoryStorage()
        await first.write("k", b"v")
        assert await second.read("k") is None
