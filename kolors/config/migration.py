"""Migration and storage configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field

from kolors.config.base import BaseConfig


class MigrationConfig(BaseConfig):
    """Tuning knobs for the legacy migration run."""

    batch_size: int = Field(
        500,
        ge=1,
        description="Number of legacy records processed between progress log lines",
    )
    validate_after_migration: bool = Field(
        True,
        description="Re-count single-colour combinations after a run and warn on shortfall",
    )
    backup_before_migration: bool = Field(
        True,
        description="Snapshot legacy records before the CLI/API triggers a run",
    )


class StorageConfig(BaseConfig):
    """File locations of the legacy source and the current combination store."""

    legacy_path: Path = Field(
        Path("./data/legacy.csv"),
        description="CSV export of legacy records (columns: id,name,hex)",
    )
    combinations_path: Path = Field(
        Path("./data/combinations.jsonl"),
        description="JSON Lines file holding current-schema combinations",
    )


__all__ = ["MigrationConfig", "StorageConfig"]
