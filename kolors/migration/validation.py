"""Structural checks for legacy records and stored combinations."""

from __future__ import annotations

from kolors.models import CurrentCombination, LegacyRecord
from kolors.storage.base import HEX_PATTERN

MIN_NAME_LENGTH = 3


def validate_legacy_record(record: LegacyRecord) -> str | None:
    """Return ``None`` when ``record`` can be migrated, else the rejection reason."""

    name = record.name.strip() if record.name is not None else ""
    if not name:
        return "name is null or empty"
    if len(name) < MIN_NAME_LENGTH:
        return "name too short"
    if record.hex_color is None or not HEX_PATTERN.fullmatch(record.hex_color):
        return "invalid hex value"
    return None


def validate_combination(combination: CurrentCombination) -> str | None:
    """Integrity check of a stored combination; returns the first problem found."""

    label = f"Combination ID {combination.id}"
    name = combination.name.strip() if combination.name else ""
    if not name:
        return f"Invalid combination ID {combination.id}: name is null or empty"
    if len(name) < MIN_NAME_LENGTH:
        return f"Invalid combination ID {combination.id}: name too short (< {MIN_NAME_LENGTH} characters)"
    if combination.created_at is None:
        return f"Invalid combination ID {combination.id}: missing creation date"
    if not combination.colors:
        return f"{label} has no colours"

    for index, color in enumerate(combination.colors, start=1):
        if not HEX_PATTERN.fullmatch(color.hex_value or ""):
            return f"{label} has invalid hex value at position {index}: '{color.hex_value}'"
        if color.position != index:
            return f"{label} has invalid position at index {index - 1}: expected {index}, found {color.position}"
    return None


__all__ = ["MIN_NAME_LENGTH", "validate_legacy_record", "validate_combination"]
