"""Configuration module exports."""

# Import Settings and get_settings from the settings module
from cachekit.settings import Settings, get_settings

# Import configuration dataclasses
from cachekit.config.cache_config import (
    FileCacheConfig,
    DebounceConfig,
    CacheKitConfig,
)

__all__ = [
    "Settings",
    "get_settings",
    "FileCacheConfig",
    "DebounceConfig",
    "CacheKitConfig",
]
