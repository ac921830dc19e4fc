from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from kolors.models import LegacyRecord


def make_records(*pairs: tuple[str | None, str | None]) -> list[LegacyRecord]:
    """Build legacy records with sequential ids from ``(name, hex)`` pairs."""

    return [
        LegacyRecord(id=index, name=name, hex_color=hex_color)
        for index, (name, hex_color) in enumerate(pairs, start=1)
    ]


def write_legacy_csv(path: Path, rows: list[tuple[int, str, str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["id,name,hex\n"] + [f"{record_id},{name},{hex_color}\n" for record_id, name, hex_color in rows]
    path.write_text("".join(lines), encoding="utf-8")


def write_jsonl(path: Path, payloads: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        for item in payloads:
            fh.write(json.dumps(item) + "\n")
