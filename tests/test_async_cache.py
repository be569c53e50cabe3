"""Tests for the AsyncFileCache facade."""

import asyncio

import pytest
from pydantic import BaseModel

from cachekit.cache import AsyncFileCache, ReadStatus


class Preferences(BaseModel):
    theme: str
    font_size: int


@pytest.fixture
def async_cache(file_cache):
    return AsyncFileCache(file_cache)


class TestAsyncFileCache:
    """Test suite for AsyncFileCache."""

    async def test_save_and_get(self, async_cache):
        """Test basic save and get operations."""
        assert await async_cache.save(b"bytes", "blob.bin") is True
        assert await async_cache.get_data("blob.bin") == b"bytes"

    async def test_get_nonexistent_key(self, async_cache):
        """Test getting a key that doesn't exist."""
        assert await async_cache.get_data("nonexistent") is None
        assert await async_cache.decode("nonexistent", dict) is None
        path = async_cache.file_cache.get_file_path("nonexistent")
        assert await async_cache.file_exists(path) is False

    async def test_encode_and_decode(self, async_cache):
        """Test JSON round-trip through pydantic."""
        value = Preferences(theme="dark", font_size=14)

        assert await async_cache.encode(value, "settings.json") is True

        assert await async_cache.decode("settings.json", Preferences) == value

    async def test_load_reports_failure(self, async_cache):
        """Test corrupt entries are reported as FAILED by load()."""
        await async_cache.save(b"[1, 2", "broken.json")

        result = await async_cache.load("broken.json", list[int])

        assert result.status is ReadStatus.FAILED
        assert await async_cache.decode("broken.json", list[int]) is None

    async def test_decode_as_unsupported_type_is_absent(self, async_cache):
        """Test decoding into a type pydantic cannot validate does not raise."""

        class Plain:
            pass

        await async_cache.save(b'{"x": 1}', "plain.json")

        assert await async_cache.decode("plain.json", Plain) is None
        result = await async_cache.load("plain.json", Plain)
        assert result.status is ReadStatus.FAILED

    async def test_file_exists_matches_file_cache(self, async_cache):
        """Test file_exists takes the same absolute path as FileCache.file_exists."""
        await async_cache.save(b"x", "present.bin")
        path = async_cache.file_cache.get_file_path("present.bin")

        assert await async_cache.file_exists(path) is True
        assert async_cache.file_cache.file_exists(path) is True

    async def test_delete(self, async_cache):
        """Test deleting an entry, twice."""
        await async_cache.save(b"x", "k")

        await async_cache.delete("k")
        await async_cache.delete("k")

        path = async_cache.file_cache.get_file_path("k")
        assert await async_cache.file_exists(path) is False

    async def test_shares_folder_with_file_cache(self, async_cache, file_cache):
        """Test entries written by either side are visible to the other."""
        file_cache.save(b"sync", "from-sync", is_asynchronous=False)
        await async_cache.save(b"async", "from-async")

        assert await async_cache.get_data("from-sync") == b"sync"
        assert file_cache.get_data("from-async") == b"async"

    async def test_encode_failure_returns_false(self, async_cache):
        """Test values pydantic cannot serialize are not written."""

        class Opaque:
            pass

        assert await async_cache.encode(Opaque(), "opaque.json") is False
        path = async_cache.file_cache.get_file_path("opaque.json")
        assert await async_cache.file_exists(path) is False

    async def test_concurrent_writes_leave_one_complete_entry(self, async_cache):
        """Test concurrent saves to one key never leave mixed content."""
        payloads = [bytes([i]) * 1024 for i in range(10)]

        results = await asyncio.gather(
            *(async_cache.save(p, "shared.bin") for p in payloads)
        )

        assert all(results)
        assert await async_cache.get_data("shared.bin") in payloads
        names = [p.name for p in async_cache.file_cache.subfolder.iterdir()]
        assert names == ["shared.bin"]
