"""Point-in-time view of legacy and migrated data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .status import MigrationStatus


@dataclass(frozen=True, slots=True)
class MigrationStatistics:
    legacy_record_count: int = 0
    single_color_combination_count: int = 0
    total_combination_count: int = 0
    migration_status: MigrationStatus = MigrationStatus.NOT_STARTED
    last_migration_time: datetime | None = None
    last_migration_success: bool = False

    def migration_progress(self) -> float:
        """Percentage of legacy records represented by single-colour combinations.

        Not clamped: pre-existing single-colour combinations can push it above 100.
        """
        if self.legacy_record_count == 0:
            return 100.0
        return self.single_color_combination_count / self.legacy_record_count * 100.0

    def is_migration_needed(self) -> bool:
        return self.legacy_record_count > 0 and not self.migration_status.is_completed()

    def is_migration_complete(self) -> bool:
        return self.migration_status.is_completed()

    def to_dict(self) -> dict[str, Any]:
        return {
            "legacyRecordCount": self.legacy_record_count,
            "singleColorCombinationCount": self.single_color_combination_count,
            "totalCombinationCount": self.total_combination_count,
            "migrationStatus": self.migration_status.value,
            "lastMigrationTime": self.last_migration_time.isoformat() if self.last_migration_time else None,
            "lastMigrationSuccess": self.last_migration_success,
            "migrationProgress": self.migration_progress(),
            "migrationNeeded": self.is_migration_needed(),
            "migrationComplete": self.is_migration_complete(),
        }

    def __str__(self) -> str:
        return (
            f"MigrationStatistics(legacy={self.legacy_record_count}, "
            f"single_color={self.single_color_combination_count}, "
            f"total={self.total_combination_count}, status={self.migration_status.value}, "
            f"progress={self.migration_progress():.1f}%)"
        )


__all__ = ["MigrationStatistics"]
