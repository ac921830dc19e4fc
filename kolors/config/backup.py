"""Backup configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator

from kolors.config.base import BaseConfig


class BackupConfig(BaseConfig):
    """Where and how legacy snapshots are kept before a migration."""

    enabled: bool = Field(False, description="Whether snapshots are written to disk")
    name: str = Field("legacy-snapshot", description="Prefix of the snapshot bundle filename")
    directory: Path | None = Field(
        Path("./backups"),
        description="Destination directory for snapshot bundles",
    )
    retention: int = Field(
        7,
        ge=1,
        description="Number of most recent snapshot bundles to keep",
    )

    @model_validator(mode="after")
    def _validate_directory(self) -> "BackupConfig":
        if self.enabled and self.directory is None:
            raise ValueError("Backup requires 'directory' when enabled.")
        return self


__all__ = ["BackupConfig"]
