from __future__ import annotations

from kolors.migration import find_existing_migration, is_already_migrated
from kolors.models import CurrentColor, CurrentCombination, LegacyRecord
from kolors.storage import InMemoryCombinationStore


def _single(name: str, hex_value: str) -> CurrentCombination:
    return CurrentCombination(name=name, colors=[CurrentColor(hex_value, 1)])


def test_matches_name_and_single_colour(store: InMemoryCombinationStore) -> None:
    saved = store.save(_single("Ocean Blue", "0000FF"))

    found = find_existing_migration(LegacyRecord(id=1, name=" ocean blue ", hex_color="0000ff"), store)

    assert found is not None
    assert found.id == saved.id


def test_different_colour_is_not_a_match(store: InMemoryCombinationStore) -> None:
    store.save(_single("Ocean Blue", "0000FF"))
    assert not is_already_migrated(LegacyRecord(id=1, name="Ocean Blue", hex_color="0000FE"), store)


def test_multi_colour_combination_is_not_a_match(store: InMemoryCombinationStore) -> None:
    store.save(CurrentCombination(name="Ocean Blue", colors=[CurrentColor("0000FF", 1), CurrentColor("FFFFFF", 2)]))
    assert not is_already_migrated(LegacyRecord(id=1, name="Ocean Blue", hex_color="0000FF"), store)


def test_substring_match_spans_distinct_names(store: InMemoryCombinationStore) -> None:
    store.save(_single("Red Color", "FF0000"))

    assert is_already_migrated(LegacyRecord(id=2, name="Red", hex_color="FF0000"), store)
    assert not is_already_migrated(LegacyRecord(id=3, name="Red Colour", hex_color="FF0000"), store)
