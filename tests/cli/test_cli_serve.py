from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from kolors.cli import main

from .utils import write_config


def _capture_uvicorn(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    calls: dict[str, Any] = {}

    def _fake_run(app: Any, host: str, port: int) -> None:
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr("kolors.cli.uvicorn.run", _fake_run)
    return calls


def test_serve_uses_web_config_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)
    with config_file.open("a", encoding="utf-8") as fh:
        fh.write('\n[web]\ntitle = "Palette Admin"\nhost = "0.0.0.0"\nport = 9100\n')
    calls = _capture_uvicorn(monkeypatch)

    exit_code = main(["--config", str(config_file), "serve"])

    assert exit_code == 0
    assert calls["host"] == "0.0.0.0"
    assert calls["port"] == 9100
    assert calls["app"].title == "Palette Admin"


def test_serve_options_override_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)
    calls = _capture_uvicorn(monkeypatch)

    exit_code = main(["--config", str(config_file), "serve", "--host", "localhost", "--port", "8123"])

    assert exit_code == 0
    assert calls["host"] == "localhost"
    assert calls["port"] == 8123
