"""Abstract interfaces for the legacy source and the current combination store."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from kolors.exceptions import StorageError
from kolors.models import CurrentCombination, LegacyRecord

HEX_PATTERN = re.compile(r"^[0-9A-Fa-f]{6}$")
MAX_NAME_LENGTH = 100


class LegacySource(ABC):
    """Read-only access to records of the deprecated single-colour schema."""

    @abstractmethod
    def list_all(self) -> list[LegacyRecord]:
        """Return every legacy record."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of legacy records."""


class CombinationStore(ABC):
    """Access to combinations of the current schema."""

    @abstractmethod
    def find_by_name_fragment(self, fragment: str) -> list[CurrentCombination]:
        """Return combinations whose name contains ``fragment`` (case-insensitive)."""

    @abstractmethod
    def find_by_color_count(self, color_count: int) -> list[CurrentCombination]:
        """Return combinations holding exactly ``color_count`` colours."""

    @abstractmethod
    def find_all(self) -> list[CurrentCombination]:
        """Return every stored combination."""

    @abstractmethod
    def save(self, combination: CurrentCombination) -> CurrentCombination:
        """Persist ``combination`` and return it with an assigned id."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored combinations."""


def check_combination(combination: CurrentCombination) -> None:
    """Reject combinations that would break the stored-schema constraints."""

    name = combination.name.strip() if combination.name else ""
    if len(name) < 3 or len(name) > MAX_NAME_LENGTH:
        raise StorageError(f"Combination name must be between 3 and {MAX_NAME_LENGTH} characters")
    if not combination.colors:
        raise StorageError(f"Combination '{name}' has no colours")
    if not combination.has_contiguous_positions():
        raise StorageError(f"Combination '{name}' has non-contiguous colour positions")
    for color in combination.colors:
        if not HEX_PATTERN.fullmatch(color.hex_value):
            raise StorageError(f"Combination '{name}' has invalid hex value '{color.hex_value}'")


__all__ = [
    "HEX_PATTERN",
    "MAX_NAME_LENGTH",
    "LegacySource",
    "CombinationStore",
    "check_combination",
]
