"""Detection of legacy records that already exist in the current store."""

from __future__ import annotations

from kolors.models import CurrentCombination, LegacyRecord
from kolors.storage.base import CombinationStore


def find_existing_migration(record: LegacyRecord, store: CombinationStore) -> CurrentCombination | None:
    """Return the combination that already represents ``record``, if any.

    A candidate is any combination whose name contains the legacy name
    (case-insensitive substring) and that holds exactly one colour equal to the
    legacy hex value. The substring rule can match a different record that
    shares part of its name (``"Red"`` inside ``"Red Color"``) when both are
    the same single colour.
    """

    name = (record.name or "").strip()
    hex_color = (record.hex_color or "").upper()
    for candidate in store.find_by_name_fragment(name):
        if candidate.color_count == 1 and candidate.colors[0].hex_value.upper() == hex_color:
            return candidate
    return None


def is_already_migrated(record: LegacyRecord, store: CombinationStore) -> bool:
    return find_existing_migration(record, store) is not None


__all__ = ["find_existing_migration", "is_already_migrated"]
