"""
Configuration dataclasses for cachekit components.
Provides immutable configuration objects for dependency injection.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cachekit.settings import Settings


@dataclass(frozen=True)
class FileCacheConfig:
    """File cache storage configuration."""

    documents_root: Path = field(default_factory=lambda: Path.home() / "Documents")
    caches_root: Path = field(default_factory=lambda: Path.home() / ".cache")
    root_folder: str = "rootfolder"


@dataclass(frozen=True)
class DebounceConfig:
    """Debouncer configuration."""

    delay: float = 0.3  # seconds


@dataclass
class CacheKitConfig:
    """Complete cachekit configuration."""

    file_cache: FileCacheConfig = field(default_factory=FileCacheConfig)
    debounce: DebounceConfig = field(default_factory=DebounceConfig)
    log_level: str = "INFO"

    @classmethod
    def from_settings(cls, settings: "Settings") -> "CacheKitConfig":
        """Create config from library settings."""
        return cls(
            file_cache=FileCacheConfig(
                documents_root=settings.documents_path,
                caches_root=settings.caches_path,
                root_folder=settings.root_folder,
            ),
            debounce=DebounceConfig(delay=settings.debounce_delay),
            log_level=settings.log_level,
        )
