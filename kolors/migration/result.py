"""Per-record outcomes and the aggregated result of one migration run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable


class OutcomeKind(str, Enum):
    MIGRATED = "migrated"
    ALREADY_MIGRATED = "already_migrated"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RecordOutcome:
    """What happened to a single legacy record."""

    record_id: int | None
    kind: OutcomeKind
    message: str | None = None

    @classmethod
    def migrated(cls, record_id: int | None) -> "RecordOutcome":
        return cls(record_id, OutcomeKind.MIGRATED)

    @classmethod
    def already_migrated(cls, record_id: int | None, message: str) -> "RecordOutcome":
        return cls(record_id, OutcomeKind.ALREADY_MIGRATED, message)

    @classmethod
    def failed(cls, record_id: int | None, message: str) -> "RecordOutcome":
        return cls(record_id, OutcomeKind.FAILED, message)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class MigrationResult:
    """Counts, diagnostics and timing of one migration run.

    The result accepts new errors and warnings until :meth:`complete` is
    called; afterwards it is read-only. Calling :meth:`complete` again only
    recomputes the summary. ``rejected`` marks a run that never started
    because another one was already in progress.
    """

    success: bool = False
    total_legacy_records: int = 0
    migrated_records: int = 0
    failed_records: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    start_time: datetime | None = field(default_factory=_now)
    end_time: datetime | None = None
    summary: str | None = None
    rejected: bool = field(default=False, compare=False)
    _completed: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def completed(self) -> bool:
        return self._completed

    def add_error(self, message: str) -> None:
        self._ensure_open()
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self._ensure_open()
        self.warnings.append(message)

    def record(self, outcome: RecordOutcome) -> "MigrationResult":
        """Fold a single record outcome into the running totals."""

        self._ensure_open()
        if outcome.kind is OutcomeKind.FAILED:
            self.failed_records += 1
            self.add_error(outcome.message or f"Legacy record ID {outcome.record_id} failed")
        else:
            self.migrated_records += 1
            if outcome.kind is OutcomeKind.ALREADY_MIGRATED and outcome.message:
                self.add_warning(outcome.message)
        return self

    def record_all(self, outcomes: Iterable[RecordOutcome]) -> "MigrationResult":
        for outcome in outcomes:
            self.record(outcome)
        return self

    def complete(self) -> "MigrationResult":
        if self.end_time is None:
            self.end_time = _now()
        self.summary = self._build_summary()
        self._completed = True
        return self

    def duration_in_seconds(self) -> int:
        if self.start_time is None or self.end_time is None:
            return 0
        return int((self.end_time - self.start_time).total_seconds())

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "totalLegacyRecords": self.total_legacy_records,
            "migratedRecords": self.migrated_records,
            "failedRecords": self.failed_records,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "summary": self.summary,
            "durationInSeconds": self.duration_in_seconds(),
        }

    def _ensure_open(self) -> None:
        if self._completed:
            raise RuntimeError("Migration result is already completed")

    def _build_summary(self) -> str:
        parts = [
            f"Migration completed {'successfully' if self.success else 'with errors'}",
            f". Total records: {self.total_legacy_records}",
            f", Migrated: {self.migrated_records}",
            f", Failed: {self.failed_records}",
            f", Duration: {self.duration_in_seconds()} seconds",
        ]
        if self.errors:
            parts.append(f", Errors: {len(self.errors)}")
        if self.warnings:
            parts.append(f", Warnings: {len(self.warnings)}")
        return "".join(parts)

    def __str__(self) -> str:
        return (
            f"MigrationResult(success={self.success}, total={self.total_legacy_records}, "
            f"migrated={self.migrated_records}, failed={self.failed_records}, "
            f"duration={self.duration_in_seconds()}s, errors={len(self.errors)}, "
            f"warnings={len(self.warnings)})"
        )


__all__ = ["OutcomeKind", "RecordOutcome", "MigrationResult"]
