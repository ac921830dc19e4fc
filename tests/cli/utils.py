"""Shared helpers for CLI tests."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch

from kolors.config import AppConfig


def write_config(base_dir: Path, *, backup_enabled: bool = True, batch_size: int = 500) -> Path:
    """Write a config.toml whose stores live next to it inside ``base_dir``."""

    config_text = f"""
logging_level = "DEBUG"

[storage]
legacy_path = "legacy.csv"
combinations_path = "combinations.jsonl"

[migration]
batch_size = {batch_size}

[backup]
enabled = {str(backup_enabled).lower()}
directory = "backups"
retention = 3
"""
    config_file = base_dir / "config.toml"
    config_file.write_text(config_text, encoding="utf-8")
    return config_file


def patch_load_config(monkeypatch: MonkeyPatch, config: AppConfig) -> None:
    """Force the CLI to return the provided config instead of reading from disk."""

    def _fake_load_config(model: object, path: Path) -> AppConfig:
        if model is not AppConfig:
            raise AssertionError("Unexpected config model request")
        return config

    monkeypatch.setattr("kolors.cli.load_config", _fake_load_config)
