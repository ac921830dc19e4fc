"""Legacy single-colour records to current combinations migration engine."""

from __future__ import annotations

from .idempotency import find_existing_migration, is_already_migrated
from .result import MigrationResult, OutcomeKind, RecordOutcome
from .service import ALREADY_IN_PROGRESS, MigrationService
from .statistics import MigrationStatistics
from .status import MigrationStatus
from .transformer import transform_record
from .validation import validate_combination, validate_legacy_record

__all__ = [
    "ALREADY_IN_PROGRESS",
    "MigrationService",
    "MigrationResult",
    "MigrationStatistics",
    "MigrationStatus",
    "OutcomeKind",
    "RecordOutcome",
    "find_existing_migration",
    "is_already_migrated",
    "transform_record",
    "validate_combination",
    "validate_legacy_record",
]
