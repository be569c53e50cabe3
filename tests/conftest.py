"""Shared fixtures for cachekit tests."""

import pytest

from cachekit.cache import Directory, FileCache
from cachekit.config import FileCacheConfig


@pytest.fixture
def cache_config(tmp_path):
    """Storage roots inside a temporary directory."""
    return FileCacheConfig(
        documents_root=tmp_path / "documents",
        caches_root=tmp_path / "caches",
    )


@pytest.fixture
def file_cache(cache_config):
    """Create a FileCache in the CACHE scope with temporary storage."""
    cache = FileCache("TestCache", Directory.CACHE, config=cache_config)
    yield cache
    cache.close()
