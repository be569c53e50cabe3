"""
Settings module for cachekit.
Uses pydantic-settings for environment variable management.
"""

from pathlib import Path
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CACHEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage roots for the two cache scopes
    documents_root: Path = Field(default_factory=lambda: Path.home() / "Documents")
    caches_root: Path = Field(default_factory=lambda: Path.home() / ".cache")

    # Parent folder of every cache folder; changing it orphans existing data
    root_folder: str = "rootfolder"

    # Debounce Configuration
    debounce_delay: float = 0.3  # seconds

    # Logging
    log_level: str = "INFO"

    @property
    def documents_path(self) -> Path:
        """Return the documents root as an absolute Path."""
        return Path(self.documents_root).expanduser().resolve()

    @property
    def caches_path(self) -> Path:
        """Return the caches root as an absolute Path."""
        return Path(self.caches_root).expanduser().resolve()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
