"""Pytest helpers for path configuration and shared migration fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from kolors.config import MigrationConfig  # noqa: E402
from kolors.migration import MigrationService  # noqa: E402
from kolors.storage import InMemoryCombinationStore, InMemoryLegacySource  # noqa: E402

from tests.utils import make_records  # noqa: E402


@pytest.fixture()
def store() -> InMemoryCombinationStore:
    return InMemoryCombinationStore()


@pytest.fixture()
def make_service(store: InMemoryCombinationStore):
    """Factory building a service over in-memory stores."""

    def _factory(*pairs: tuple[str | None, str | None], config: MigrationConfig | None = None) -> MigrationService:
        source = InMemoryLegacySource(make_records(*pairs))
        return MigrationService(source, store, config=config)

    return _factory
