"""Configuration management with Pydantic settings."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from memzip.app.ports.archive import CompressionLevel, TreeWalkMode


class Settings(BaseSettings):
    """memzip configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMZIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    compression_level: CompressionLevel = Field(
        default=CompressionLevel.OPTIMAL,
        description="Compression level applied to every entry of an archive",
    )

    tree_walk_mode: TreeWalkMode = Field(
        default=TreeWalkMode.REPLICATE,
        description="Directory walk mode: replicate (re-list descendants per level) or hierarchical",
    )

    timeout_seconds: float | None = Field(
        default=None,
        ge=0.0,
        description="Cancel archive builds that run longer than this many seconds",
    )

    follow_symlinks: bool = Field(
        default=False,
        description="Descend into symlinked directories when walking trees (symlinked files are always included)",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level configured by the CLI",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalized


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings | None) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
