"""File-backed stores: a CSV legacy export and a JSON Lines combination store."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path

import polars as pl
from loguru import logger

from kolors.exceptions import LegacySourceError, StorageError
from kolors.models import CurrentCombination, LegacyRecord

from .base import CombinationStore, LegacySource, check_combination

_LEGACY_SCHEMA = {"id": pl.Int64, "name": pl.String, "hex": pl.String}


class CsvLegacySource(LegacySource):
    """Legacy records exported as CSV with the columns ``id,name,hex``.

    A missing file means the legacy table has already been dropped and is
    reported as an empty source.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def list_all(self) -> list[LegacyRecord]:
        frame = self._read()
        if frame is None:
            return []
        return [
            LegacyRecord(id=row["id"], name=row["name"], hex_color=row["hex"])
            for row in frame.iter_rows(named=True)
        ]

    def count(self) -> int:
        frame = self._read()
        return 0 if frame is None else frame.height

    def _read(self) -> pl.DataFrame | None:
        if not self.path.exists():
            logger.debug("Legacy export {} not found; treating as empty", self.path)
            return None
        try:
            return pl.read_csv(
                self.path,
                columns=list(_LEGACY_SCHEMA),
                schema_overrides=_LEGACY_SCHEMA,
            )
        except (OSError, pl.exceptions.PolarsError) as exc:
            raise LegacySourceError(f"Cannot read legacy export {self.path}: {exc}") from exc


class JsonlCombinationStore(CombinationStore):
    """Combinations stored one JSON object per line.

    The file is loaded once; every save is appended (or the file rewritten when
    an existing id is updated). Like the in-memory store, reads and saves work
    on copies of the cached combinations.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._items: dict[int, CurrentCombination] | None = None

    def find_by_name_fragment(self, fragment: str) -> list[CurrentCombination]:
        needle = fragment.lower()
        return [deepcopy(c) for c in self._load().values() if needle in c.name.lower()]

    def find_by_color_count(self, color_count: int) -> list[CurrentCombination]:
        return [deepcopy(c) for c in self._load().values() if c.color_count == color_count]

    def find_all(self) -> list[CurrentCombination]:
        return [deepcopy(c) for c in self._load().values()]

    def save(self, combination: CurrentCombination) -> CurrentCombination:
        check_combination(combination)
        items = self._load()
        is_update = combination.id is not None and combination.id in items
        stored = deepcopy(combination)
        if stored.id is None:
            stored.id = max(items, default=0) + 1

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if is_update:
                self._rewrite({**items, stored.id: stored})
            else:
                with self.path.open("a", encoding="utf-8") as fh:
                    fh.write(json.dumps(stored.to_dict(), ensure_ascii=False) + "\n")
        except OSError as exc:
            raise StorageError(f"Cannot write combination '{combination.name}' to {self.path}: {exc}") from exc

        # Only a successful write may touch the cache or the caller's object.
        items[stored.id] = stored
        combination.id = stored.id
        return combination

    def count(self) -> int:
        return len(self._load())

    def _load(self) -> dict[int, CurrentCombination]:
        if self._items is not None:
            return self._items

        items: dict[int, CurrentCombination] = {}
        if self.path.exists():
            try:
                with self.path.open("r", encoding="utf-8") as fh:
                    for line_no, line in enumerate(fh, start=1):
                        if not line.strip():
                            continue
                        combination = CurrentCombination.from_dict(json.loads(line))
                        if combination.id is None:
                            combination.id = max(items, default=0) + 1
                        items[combination.id] = combination
            except (OSError, ValueError, KeyError) as exc:
                raise StorageError(f"Cannot load combinations from {self.path}: {exc}") from exc
            logger.debug("Loaded {} combinations from {}", len(items), self.path)
        self._items = items
        return items

    def _rewrite(self, items: dict[int, CurrentCombination]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            for combination in items.values():
                fh.write(json.dumps(combination.to_dict(), ensure_ascii=False) + "\n")
        tmp_path.replace(self.path)


__all__ = ["CsvLegacySource", "JsonlCombinationStore"]
