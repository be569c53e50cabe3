"""Tests for settings and configuration dataclasses."""

from pathlib import Path

import pytest

from cachekit.cache import Directory
from cachekit.config import (
    CacheKitConfig,
    DebounceConfig,
    FileCacheConfig,
    Settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset the cached settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for environment-driven Settings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("CACHEKIT_ROOT_FOLDER", raising=False)
        monkeypatch.delenv("CACHEKIT_DEBOUNCE_DELAY", raising=False)
        settings = Settings(_env_file=None)

        assert settings.root_folder == "rootfolder"
        assert settings.debounce_delay == 0.3
        assert settings.log_level == "INFO"
        assert settings.documents_path.is_absolute()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test CACHEKIT_* variables override defaults, case-insensitively."""
        monkeypatch.setenv("CACHEKIT_CACHES_ROOT", str(tmp_path / "c"))
        monkeypatch.setenv("cachekit_debounce_delay", "1.5")

        settings = Settings(_env_file=None)

        assert settings.caches_path == (tmp_path / "c").resolve()
        assert settings.debounce_delay == 1.5

    def test_get_settings_is_cached(self):
        """Test get_settings() returns the same instance."""
        assert get_settings() is get_settings()


class TestFileCacheConfig:
    """Tests for FileCacheConfig."""

    def test_create_with_defaults(self):
        """Test creating config with default values."""
        config = FileCacheConfig()

        assert config.root_folder == "rootfolder"
        assert config.caches_root == Path.home() / ".cache"

    def test_immutability(self):
        """Test that FileCacheConfig is immutable."""
        config = FileCacheConfig()

        with pytest.raises(Exception):  # FrozenInstanceError
            config.root_folder = "other"


class TestCacheKitConfig:
    """Tests for CacheKitConfig."""

    def test_create_with_defaults(self):
        """Test creating config with default components."""
        config = CacheKitConfig()

        assert isinstance(config.file_cache, FileCacheConfig)
        assert config.debounce == DebounceConfig()

    def test_from_settings(self, tmp_path):
        """Test creating config from settings."""
        settings = Settings(
            _env_file=None,
            documents_root=tmp_path / "d",
            caches_root=tmp_path / "c",
            root_folder="store",
            debounce_delay=0.05,
            log_level="DEBUG",
        )

        config = CacheKitConfig.from_settings(settings)

        assert config.file_cache.documents_root == (tmp_path / "d").resolve()
        assert config.file_cache.caches_root == (tmp_path / "c").resolve()
        assert config.file_cache.root_folder == "store"
        assert config.debounce.delay == 0.05
        assert config.log_level == "DEBUG"


class TestDirectory:
    """Tests for scope root resolution."""

    def test_root_from_config(self, tmp_path):
        """Test each scope maps to its configured root."""
        config = FileCacheConfig(documents_root=tmp_path / "d", caches_root=tmp_path / "c")

        assert Directory.DOCUMENT.root(config) == tmp_path / "d"
        assert Directory.CACHE.root(config) == tmp_path / "c"

    def test_root_from_environment(self, monkeypatch, tmp_path):
        """Test the default config comes from environment settings."""
        monkeypatch.setenv("CACHEKIT_DOCUMENTS_ROOT", str(tmp_path / "docs"))

        assert Directory.DOCUMENT.root() == (tmp_path / "docs").resolve()
