"""Conversion of legacy records into current-schema combinations."""

from __future__ import annotations

from datetime import datetime, timezone

from kolors.models import CurrentCombination, LegacyRecord


def transform_record(record: LegacyRecord, *, now: datetime | None = None) -> CurrentCombination:
    """Build a single-colour combination from a validated legacy record."""

    if record.name is None or record.hex_color is None:
        raise ValueError(f"Legacy record ID {record.id} has not been validated")

    combination = CurrentCombination(
        name=record.name.strip(),
        created_at=now or datetime.now(timezone.utc),
    )
    combination.add_color(record.hex_color.upper())
    return combination


__all__ = ["transform_record"]
