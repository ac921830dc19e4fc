"""Data models shared by the legacy source, the current store and the migrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class LegacyRecord:
    """A record of the deprecated schema: one name and one colour."""

    id: int | None
    name: str | None
    hex_color: str | None


@dataclass(slots=True)
class CurrentColor:
    """A single colour inside a combination."""

    hex_value: str
    position: int

    def __post_init__(self) -> None:
        self.hex_value = self.hex_value.upper()


@dataclass(slots=True)
class CurrentCombination:
    """A named combination owning an ordered list of colours.

    Positions of ``colors`` always form the sequence ``1..N``; use
    :meth:`add_color` and :meth:`remove_color` instead of editing the list.
    """

    name: str
    id: int | None = None
    created_at: datetime | None = field(default_factory=lambda: datetime.now(timezone.utc))
    colors: list[CurrentColor] = field(default_factory=list)

    @property
    def color_count(self) -> int:
        return len(self.colors)

    def add_color(self, hex_value: str) -> CurrentColor:
        color = CurrentColor(hex_value=hex_value, position=len(self.colors) + 1)
        self.colors.append(color)
        return color

    def remove_color(self, position: int) -> CurrentColor:
        if position < 1 or position > len(self.colors):
            raise ValueError(f"No colour at position {position} in '{self.name}'")
        removed = self.colors.pop(position - 1)
        for index, color in enumerate(self.colors, start=1):
            color.position = index
        return removed

    def has_contiguous_positions(self) -> bool:
        return [color.position for color in self.colors] == list(range(1, len(self.colors) + 1))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "colors": [{"hex_value": c.hex_value, "position": c.position} for c in self.colors],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "CurrentCombination":
        created_raw = payload.get("created_at")
        created_at = datetime.fromisoformat(created_raw) if created_raw else None
        colors = [
            CurrentColor(hex_value=str(item["hex_value"]), position=int(item["position"]))
            for item in payload.get("colors", [])
        ]
        return cls(
            name=str(payload["name"]),
            id=payload.get("id"),
            created_at=created_at,
            colors=colors,
        )


__all__ = ["LegacyRecord", "CurrentColor", "CurrentCombination"]
