"""Legacy source and current store implementations."""

from __future__ import annotations

from pathlib import Path

from kolors.config import StorageConfig, resolve_path

from .base import CombinationStore, LegacySource, check_combination
from .files import CsvLegacySource, JsonlCombinationStore
from .memory import InMemoryCombinationStore, InMemoryLegacySource


def create_stores(config: StorageConfig, *, base_path: Path) -> tuple[LegacySource, CombinationStore]:
    """Build the file-backed stores described by ``config``."""

    legacy = CsvLegacySource(resolve_path(config.legacy_path, base_path))
    store = JsonlCombinationStore(resolve_path(config.combinations_path, base_path))
    return legacy, store


__all__ = [
    "LegacySource",
    "CombinationStore",
    "check_combination",
    "CsvLegacySource",
    "JsonlCombinationStore",
    "InMemoryLegacySource",
    "InMemoryCombinationStore",
    "create_stores",
]
