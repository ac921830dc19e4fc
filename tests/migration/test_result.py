from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kolors.migration import MigrationResult, RecordOutcome


def test_fold_outcomes_into_counts() -> None:
    result = MigrationResult(total_legacy_records=3)
    result.record_all(
        [
            RecordOutcome.migrated(1),
            RecordOutcome.already_migrated(2, "Ocean already migrated"),
            RecordOutcome.failed(3, "Invalid legacy record ID 3: name too short"),
        ]
    )

    assert result.migrated_records == 2
    assert result.failed_records == 1
    assert result.warnings == ["Ocean already migrated"]
    assert result.errors == ["Invalid legacy record ID 3: name too short"]


def test_complete_builds_summary_and_freezes() -> None:
    result = MigrationResult(success=True, total_legacy_records=2, migrated_records=1, failed_records=1)
    result.add_error("boom")
    result.add_warning("careful")
    result.complete()

    assert result.end_time is not None
    assert result.summary is not None
    assert result.summary.startswith("Migration completed successfully. Total records: 2")
    assert "Migrated: 1, Failed: 1" in result.summary
    assert result.summary.endswith("Errors: 1, Warnings: 1")

    with pytest.raises(RuntimeError):
        result.add_error("late")
    with pytest.raises(RuntimeError):
        result.add_warning("late")


def test_complete_twice_keeps_end_time() -> None:
    result = MigrationResult(success=False)
    result.complete()
    first_end = result.end_time
    first_summary = result.summary

    result.complete()

    assert result.end_time == first_end
    assert result.summary == first_summary
    assert "with errors" in (result.summary or "")


def test_summary_omits_empty_diagnostics() -> None:
    result = MigrationResult(success=True).complete()
    assert "Errors" not in (result.summary or "")
    assert "Warnings" not in (result.summary or "")


def test_duration_in_seconds() -> None:
    start = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    result = MigrationResult(start_time=start, end_time=start + timedelta(seconds=5, milliseconds=900))
    assert result.duration_in_seconds() == 5

    assert MigrationResult(start_time=None).duration_in_seconds() == 0
    assert MigrationResult().duration_in_seconds() == 0


def test_to_dict_uses_camel_case_fields() -> None:
    payload = MigrationResult(success=True, total_legacy_records=4, migrated_records=4).complete().to_dict()

    assert payload["success"] is True
    assert payload["totalLegacyRecords"] == 4
    assert payload["migratedRecords"] == 4
    assert payload["failedRecords"] == 0
    assert payload["errors"] == []
    assert payload["warnings"] == []
    assert payload["endTime"] is not None
    assert payload["summary"].startswith("Migration completed successfully")
