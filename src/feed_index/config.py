"""
Configuration management for the feed index.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseSettings):
    """Configuration for the storage layer."""

    base_path: Path = Field(
        default=Path("./feed"), description="Root directory of the local feed"
    )
    index_file_name: str = Field(
        default="packageindex.json",
        description="File name of the package index document under base_path",
    )

    model_config = SettingsConfigDict(env_prefix="STORAGE_")


class IndexConfig(BaseSettings):
    """Configuration for index documents."""

    persist_when_empty: bool = Field(
        default=False,
        description=(
            "Keep writing the index document when it holds no packages. "
            "When off, an empty document is deleted instead."
        ),
    )
    slow_write_threshold: float = Field(
        default=1.0,
        description="Seconds after which an index write is logged as slow",
    )

    model_config = SettingsConfigDict(env_prefix="INDEX_")


class Config(BaseSettings):
    """Main configuration."""

    # Sub-configs
    storage: StorageConfig = Field(default_factory=StorageConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)

    # Global settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_nested_delimiter="__"
    )

    @property
    def index_path(self) -> Path:
        """Full path of the package index document."""
        return self.storage.base_path / self.storage.index_file_name


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
