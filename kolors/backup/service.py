"""Snapshot bundles of legacy records taken before a migration."""

from __future__ import annotations

import io
import json
import tarfile
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from loguru import logger

from kolors.config import BackupConfig, resolve_path
from kolors.exceptions import BackupError
from kolors.models import LegacyRecord

RECORDS_MEMBER = "legacy-records.jsonl"
MANIFEST_MEMBER = "MANIFEST.json"


@dataclass(frozen=True)
class BackupResult:
    """Outcome of a snapshot run."""

    bundle_path: Path | None
    record_count: int
    manifest: dict[str, Any]


class BackupService:
    """Writes legacy snapshots as ``.tar.gz`` bundles and enforces retention."""

    def __init__(self, config: BackupConfig | None, *, base_path: Path | None = None) -> None:
        self.config = config
        self.base_path = base_path or Path.cwd()

    @property
    def enabled(self) -> bool:
        return bool(self.config and self.config.enabled)

    def snapshot(self, records: Sequence[LegacyRecord]) -> BackupResult:
        """Persist ``records`` when backups are enabled; always return the manifest."""

        timestamp = datetime.now(timezone.utc)
        manifest: dict[str, Any] = {
            "name": self.config.name if self.config else "legacy-snapshot",
            "created_at": timestamp.isoformat().replace("+00:00", "Z"),
            "record_count": len(records),
        }

        if not self.enabled:
            logger.info("Backup storage is disabled; snapshot of {} legacy records kept in memory only", len(records))
            return BackupResult(bundle_path=None, record_count=len(records), manifest=manifest)

        assert self.config is not None and self.config.directory is not None
        directory = resolve_path(self.config.directory, self.base_path)
        slug = timestamp.strftime("%Y%m%dT%H%M%S%fZ")
        bundle_path = directory / f"{self.config.name}-{slug}.tar.gz"

        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tarfile.open(bundle_path, "w:gz") as tar:
                payload = "".join(
                    json.dumps(asdict(record), ensure_ascii=False) + "\n" for record in records
                ).encode("utf-8")
                self._add_member(tar, RECORDS_MEMBER, payload, timestamp)
                manifest_bytes = json.dumps(manifest, ensure_ascii=False, indent=2).encode("utf-8")
                self._add_member(tar, MANIFEST_MEMBER, manifest_bytes, timestamp)
        except OSError as exc:
            if bundle_path.exists():
                bundle_path.unlink()
            raise BackupError(f"Cannot write legacy snapshot {bundle_path}: {exc}") from exc

        logger.info("Legacy snapshot written to {} ({} records)", bundle_path, len(records))
        self._enforce_retention(directory)
        return BackupResult(bundle_path=bundle_path, record_count=len(records), manifest=manifest)

    def _add_member(self, tar: tarfile.TarFile, name: str, data: bytes, timestamp: datetime) -> None:
        info = tarfile.TarInfo(name)
        info.size = len(data)
        info.mtime = int(timestamp.timestamp())
        tar.addfile(info, io.BytesIO(data))

    def _enforce_retention(self, directory: Path) -> None:
        assert self.config is not None
        prefix = f"{self.config.name}-"
        archives = sorted(
            (
                p
                for p in directory.iterdir()
                if p.is_file() and p.name.startswith(prefix) and p.name.endswith(".tar.gz")
            ),
            key=lambda p: p.name,
            reverse=True,
        )
        for old_file in archives[self.config.retention :]:
            logger.info("Removing expired legacy snapshot {}", old_file)
            old_file.unlink(missing_ok=True)


__all__ = ["BackupService", "BackupResult", "RECORDS_MEMBER", "MANIFEST_MEMBER"]
