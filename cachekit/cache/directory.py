"""Storage scopes a file cache can live in."""

from enum import Enum
from pathlib import Path
from typing import Optional

from cachekit.config.cache_config import CacheKitConfig, FileCacheConfig
from cachekit.settings import get_settings


class Directory(str, Enum):
    """
    Root location of a cache folder.

    DOCUMENT is the backed-up persistent area; use it for data the user would
    miss. CACHE is for data that can be downloaded again or regenerated.
    """

    DOCUMENT = "document"
    CACHE = "cache"

    def root(self, config: Optional[FileCacheConfig] = None) -> Path:
        """Return the root path for this scope.

        Args:
            config: Storage configuration. Defaults to the one built from
                environment settings.
        """
        if config is None:
            config = default_file_cache_config()
        if self is Directory.DOCUMENT:
            return Path(config.documents_root)
        return Path(config.caches_root)


def default_file_cache_config() -> FileCacheConfig:
    """Build the file cache configuration from environment settings."""
    return CacheKitConfig.from_settings(get_settings()).file_cache
