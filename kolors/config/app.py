"""Application-level configuration models."""

from __future__ import annotations

from pydantic import Field

from kolors.config.backup import BackupConfig
from kolors.config.base import BaseConfig
from kolors.config.migration import MigrationConfig, StorageConfig
from kolors.config.web import WebConfig


class AppConfig(BaseConfig):
    """Top-level runtime configuration for the entire application."""

    logging_level: str = Field("INFO", description="Log level: DEBUG, INFO, WARNING, ERROR")
    storage: StorageConfig = Field(default_factory=StorageConfig, description="Legacy/current store locations")
    migration: MigrationConfig = Field(default_factory=MigrationConfig, description="Migration run settings")
    backup: BackupConfig | None = Field(None, description="Legacy snapshot configuration")
    web: WebConfig | None = Field(None, description="Admin API configuration")


__all__ = ["AppConfig"]
