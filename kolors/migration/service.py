"""Orchestration of the legacy-to-current migration.

:class:`MigrationService` drives a run through the following steps:

1. Move the status to ``IN_PROGRESS`` (rejecting a second concurrent run).
2. Read every legacy record. An unreadable source aborts the run with
   :class:`~kolors.exceptions.LegacySourceError`; an empty one ends it with
   ``NO_LEGACY_DATA``.
3. Push each record through validation, the already-migrated check and the
   transformer, saving new combinations to the current store. Every record
   yields a :class:`RecordOutcome`; a failing record never stops the batch.
4. Fold the outcomes into a :class:`MigrationResult`, pick the terminal
   status from the counts and optionally re-count single-colour combinations.
5. Complete the result and publish it, together with the status, as the
   service's last run.

Status and last result are shared by every caller of the instance and are
only read or replaced while holding ``_lock``.
"""

from __future__ import annotations

from threading import Lock

from loguru import logger

from kolors.backup import BackupService
from kolors.config import MigrationConfig
from kolors.exceptions import LegacySourceError
from kolors.models import LegacyRecord
from kolors.storage.base import CombinationStore, LegacySource

from .idempotency import is_already_migrated
from .result import MigrationResult, OutcomeKind, RecordOutcome
from .statistics import MigrationStatistics
from .status import MigrationStatus
from .transformer import transform_record
from .validation import validate_combination, validate_legacy_record

ALREADY_IN_PROGRESS = "Migration is already in progress"


class MigrationService:
    """Migrates legacy records into the current store and reports on it."""

    def __init__(
        self,
        legacy_source: LegacySource,
        store: CombinationStore,
        *,
        config: MigrationConfig | None = None,
        backup_service: BackupService | None = None,
    ) -> None:
        self.legacy_source = legacy_source
        self.store = store
        self.config = config or MigrationConfig()
        self.backup_service = backup_service
        self._lock = Lock()
        self._status = MigrationStatus.NOT_STARTED
        self._last_result: MigrationResult | None = None

    # ------------------------------------------------------------------
    # Migration run
    # ------------------------------------------------------------------
    def migrate(self) -> MigrationResult:
        """Run the migration; per-record problems are reported in the result.

        Raises :class:`LegacySourceError` when the legacy source cannot be read.
        """

        with self._lock:
            if self._status.is_in_progress():
                logger.warning("Migration requested while another run is in progress; ignoring")
                return _rejected_result(ALREADY_IN_PROGRESS)
            self._status = MigrationStatus.IN_PROGRESS

        logger.info("Starting legacy data migration")
        try:
            return self._run(MigrationResult())
        except BaseException:
            with self._lock:
                self._status = MigrationStatus.FAILED
            raise

    def _run(self, result: MigrationResult) -> MigrationResult:
        try:
            records = self.legacy_source.list_all()
        except LegacySourceError:
            logger.exception("Legacy source is unreadable; migration aborted")
            raise
        except Exception as exc:
            logger.exception("Legacy source is unreadable; migration aborted")
            raise LegacySourceError(f"Cannot read legacy records: {exc}") from exc

        result.total_legacy_records = len(records)
        if not records:
            logger.info("No legacy records found; nothing to migrate")
            result.success = True
            return self._publish(result, MigrationStatus.NO_LEGACY_DATA)

        logger.info("Found {} legacy records to migrate", len(records))
        single_color_before = 0
        if self.config.validate_after_migration:
            try:
                single_color_before = self._count_single_color()
            except Exception as exc:
                logger.warning("Cannot count existing single-colour combinations: {}", exc)

        created = 0
        batch_size = self.config.batch_size
        for start in range(0, len(records), batch_size):
            outcomes = [self._process_record(record) for record in records[start : start + batch_size]]
            result.record_all(outcomes)
            created += sum(1 for outcome in outcomes if outcome.kind is OutcomeKind.MIGRATED)
            logger.info(
                "Processed {}/{} legacy records (migrated={}, failed={})",
                min(start + batch_size, len(records)),
                len(records),
                result.migrated_records,
                result.failed_records,
            )

        result.success = result.migrated_records > 0 or result.total_legacy_records == 0
        status = MigrationStatus.for_counts(
            result.total_legacy_records, result.migrated_records, result.failed_records
        )

        if self.config.validate_after_migration:
            self._check_single_color_count(result, single_color_before + created)

        return self._publish(result, status)

    def _process_record(self, record: LegacyRecord) -> RecordOutcome:
        reason = validate_legacy_record(record)
        if reason is not None:
            message = f"Invalid legacy record ID {record.id}: {reason}"
            logger.warning(message)
            return RecordOutcome.failed(record.id, message)

        name = (record.name or "").strip()
        try:
            if is_already_migrated(record, self.store):
                logger.debug("Legacy record ID {} ({}) already migrated", record.id, name)
                return RecordOutcome.already_migrated(record.id, f"{name} already migrated")

            combination = self.store.save(transform_record(record))
        except Exception as exc:
            message = f"Failed to migrate legacy record ID {record.id} ({name}): {exc}"
            logger.error(message)
            return RecordOutcome.failed(record.id, message)

        logger.debug("Migrated legacy record ID {} to combination ID {}", record.id, combination.id)
        return RecordOutcome.migrated(record.id)

    def _count_single_color(self) -> int:
        return len(self.store.find_by_color_count(1))

    def _check_single_color_count(self, result: MigrationResult, expected: int) -> None:
        try:
            actual = self._count_single_color()
        except Exception as exc:
            result.add_warning(f"Post-migration validation could not run: {exc}")
            logger.warning("Post-migration validation could not run: {}", exc)
            return

        if actual < expected:
            message = (
                f"Post-migration validation: expected at least {expected} "
                f"single-color combinations, found {actual}"
            )
            result.add_warning(message)
            logger.warning(message)

    def _publish(self, result: MigrationResult, status: MigrationStatus) -> MigrationResult:
        result.complete()
        with self._lock:
            self._status = status
            self._last_result = result
        logger.info("{} ({})", result.summary, status.description)
        return result

    # ------------------------------------------------------------------
    # Status and reporting
    # ------------------------------------------------------------------
    def get_status(self) -> MigrationStatus:
        with self._lock:
            return self._status

    def get_last_result(self) -> MigrationResult | None:
        with self._lock:
            return self._last_result

    def reset_status(self) -> bool:
        """Forget the last run. Refused (returns ``False``) while a run is in progress."""

        with self._lock:
            if self._status.is_in_progress():
                logger.warning("Cannot reset migration status while a run is in progress")
                return False
            self._status = MigrationStatus.NOT_STARTED
            self._last_result = None
        logger.info("Migration status reset")
        return True

    def is_legacy_data_present(self) -> bool:
        try:
            return self.legacy_source.count() > 0
        except Exception as exc:
            logger.error("Error checking for legacy data: {}", exc)
            return False

    def get_statistics(self) -> MigrationStatistics:
        legacy_count = single_color = total = 0
        try:
            legacy_count = self.legacy_source.count()
            single_color = self._count_single_color()
            total = self.store.count()
        except Exception as exc:
            logger.error("Error getting migration statistics: {}", exc)

        with self._lock:
            status = self._status
            last = self._last_result

        return MigrationStatistics(
            legacy_record_count=legacy_count,
            single_color_combination_count=single_color,
            total_combination_count=total,
            migration_status=status,
            last_migration_time=last.end_time if last else None,
            last_migration_success=last.success if last else False,
        )

    def create_backup(self) -> bool:
        """Snapshot all legacy records; ``False`` when the snapshot cannot be taken."""

        try:
            logger.info("Creating backup of legacy records...")
            records = self.legacy_source.list_all()
            if self.backup_service is not None:
                self.backup_service.snapshot(records)
            logger.info("Backup available for {} legacy records", len(records))
            return True
        except Exception as exc:
            logger.error("Failed to create backup: {}", exc)
            return False

    def validate_migrated_data(self) -> MigrationResult:
        """Check every stored combination for structural integrity."""

        logger.info("Validating migrated data integrity")
        result = MigrationResult()
        try:
            combinations = self.store.find_all()
        except Exception as exc:
            result.success = False
            result.add_error(f"Data validation failed with exception: {exc}")
            logger.error("Data validation failed with exception: {}", exc)
            return result.complete()

        result.migrated_records = len(combinations)
        invalid = 0
        for combination in combinations:
            problem = validate_combination(combination)
            if problem is not None:
                invalid += 1
                result.add_error(problem)

        result.success = invalid == 0
        if invalid:
            logger.warning(
                "Data validation found issues. Valid: {}, Invalid: {}",
                len(combinations) - invalid,
                invalid,
            )
        else:
            logger.info("Data validation completed successfully. Validated {} combinations", len(combinations))
        return result.complete()


def _rejected_result(message: str) -> MigrationResult:
    result = MigrationResult(success=False, rejected=True)
    result.add_error(message)
    return result.complete()


__all__ = ["MigrationService", "ALREADY_IN_PROGRESS"]
