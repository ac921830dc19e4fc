"""Lifecycle states of a migration run."""

from __future__ import annotations

from enum import Enum


class MigrationStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    COMPLETED_WITH_ERRORS = "COMPLETED_WITH_ERRORS"
    FAILED = "FAILED"
    NO_LEGACY_DATA = "NO_LEGACY_DATA"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def is_completed(self) -> bool:
        return self in (MigrationStatus.COMPLETED, MigrationStatus.COMPLETED_WITH_ERRORS)

    def is_in_progress(self) -> bool:
        return self is MigrationStatus.IN_PROGRESS

    def has_errors(self) -> bool:
        return self in (MigrationStatus.COMPLETED_WITH_ERRORS, MigrationStatus.FAILED)

    @classmethod
    def for_counts(cls, total: int, migrated: int, failed: int) -> "MigrationStatus":
        """Terminal status of a run that processed ``total`` records."""

        if total == 0:
            return cls.NO_LEGACY_DATA
        if failed == 0:
            return cls.COMPLETED
        if migrated > 0:
            return cls.COMPLETED_WITH_ERRORS
        return cls.FAILED


_DESCRIPTIONS = {
    MigrationStatus.NOT_STARTED: "Migration not started",
    MigrationStatus.IN_PROGRESS: "Migration in progress",
    MigrationStatus.COMPLETED: "Migration completed successfully",
    MigrationStatus.COMPLETED_WITH_ERRORS: "Migration completed with errors",
    MigrationStatus.FAILED: "Migration failed",
    MigrationStatus.NO_LEGACY_DATA: "No legacy data found",
}


__all__ = ["MigrationStatus"]
