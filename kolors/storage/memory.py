"""In-memory stores used for embedding the engine and for tests."""

from __future__ import annotations

from copy import deepcopy
from typing import Iterable

from kolors.models import CurrentCombination, LegacyRecord

from .base import CombinationStore, LegacySource, check_combination


class InMemoryLegacySource(LegacySource):
    def __init__(self, records: Iterable[LegacyRecord] = ()) -> None:
        self._records = list(records)

    def list_all(self) -> list[LegacyRecord]:
        return list(self._records)

    def count(self) -> int:
        return len(self._records)


class InMemoryCombinationStore(CombinationStore):
    """Dict-backed store; returned combinations are copies of the stored ones."""

    def __init__(self, combinations: Iterable[CurrentCombination] = ()) -> None:
        self._items: dict[int, CurrentCombination] = {}
        for combination in combinations:
            self.save(combination)

    def find_by_name_fragment(self, fragment: str) -> list[CurrentCombination]:
        needle = fragment.lower()
        return [deepcopy(c) for c in self._items.values() if needle in c.name.lower()]

    def find_by_color_count(self, color_count: int) -> list[CurrentCombination]:
        return [deepcopy(c) for c in self._items.values() if c.color_count == color_count]

    def find_all(self) -> list[CurrentCombination]:
        return [deepcopy(c) for c in self._items.values()]

    def save(self, combination: CurrentCombination) -> CurrentCombination:
        check_combination(combination)
        if combination.id is None:
            combination.id = max(self._items, default=0) + 1
        self._items[combination.id] = deepcopy(combination)
        return combination

    def count(self) -> int:
        return len(self._items)


__all__ = ["InMemoryLegacySource", "InMemoryCombinationStore"]
