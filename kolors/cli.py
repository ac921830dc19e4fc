"""Command line interface for the kolors migration engine."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
import uvicorn
from loguru import logger

from .backup import BackupService
from .config import AppConfig, WebConfig, load_config, resolve_path
from .exceptions import LegacySourceError
from .migration import MigrationService
from .storage import create_stores
from .web import create_app


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path
    _config: AppConfig | None = None
    _service: MigrationService | None = None

    def ensure_config(self) -> AppConfig:
        if self._config is None:
            logger.info("Loading configuration from {}", self.config_path)
            self._config = load_config(AppConfig, self.config_path)
            _configure_logging(self._config.logging_level)
        return self._config

    def ensure_service(self) -> MigrationService:
        if self._service is None:
            config = self.ensure_config()
            base_path = self.config_path.parent
            legacy_source, store = create_stores(config.storage, base_path=base_path)
            self._service = MigrationService(
                legacy_source,
                store,
                config=config.migration,
                backup_service=BackupService(config.backup, base_path=base_path),
            )
        return self._service


app = typer.Typer(help="Kolors legacy data migration tools")
migrate_app = typer.Typer(help="Legacy record migration commands")
app.add_typer(migrate_app, name="migrate")


def _default_config_path() -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    return repo_root / "config" / "example.toml"


def _configure_logging(level: str) -> None:
    """Replace every loguru sink with one writing to the current ``sys.stderr``."""

    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level=level.upper())


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> None:
    raise typer.Exit(code)


def _echo_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        _default_config_path(),
        help="Path to the TOML configuration file",
    ),
) -> None:
    """Initialise CLI state."""

    ctx.obj = CLIState(config_path=config.resolve())


@app.command(help="Show configuration and migration statistics")
def status(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()
    service = state.ensure_service()
    base_path = state.config_path.parent

    logger.info("=== General Configuration ===")
    logger.info("Logging level: {}", config.logging_level)
    logger.info("Legacy export: {}", config.storage.legacy_path)
    logger.info("Combination store: {}", config.storage.combinations_path)
    logger.info("Batch size: {}", config.migration.batch_size)
    logger.info("Post-migration validation: {}", config.migration.validate_after_migration)

    logger.info("=== Backup Configuration ===")
    if config.backup and config.backup.enabled:
        logger.info("Directory: {}", resolve_path(config.backup.directory, base_path) if config.backup.directory else None)
        logger.info("Retention: {}", config.backup.retention)
    else:
        logger.info("Not configured")

    statistics = service.get_statistics()
    logger.info("=== Migration Statistics ===")
    logger.info("Legacy records: {}", statistics.legacy_record_count)
    logger.info("Single-colour combinations: {}", statistics.single_color_combination_count)
    logger.info("Total combinations: {}", statistics.total_combination_count)
    logger.info("Progress: {:.1f}%", statistics.migration_progress())
    logger.info("Migration needed: {}", statistics.is_migration_needed())


@migrate_app.command("run", help="Migrate legacy records into combinations")
def migrate_run(
    ctx: typer.Context,
    skip_backup: bool = typer.Option(
        False,
        "--skip-backup",
        help="Do not snapshot legacy records before migrating",
    ),
) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()
    service = state.ensure_service()

    if not service.is_legacy_data_present():
        logger.warning("No legacy data found to migrate")

    if config.migration.backup_before_migration and not skip_backup:
        if not service.create_backup():
            logger.warning("Failed to create backup, but proceeding with migration")

    try:
        result = service.migrate()
    except LegacySourceError as exc:
        logger.error("Migration run failed: {}", exc)
        _exit(1)
        return

    _echo_json(result.to_dict())
    if not result.success:
        _exit(1)


@migrate_app.command("stats", help="Print migration statistics as JSON")
def migrate_stats(ctx: typer.Context) -> None:
    service = _get_state(ctx).ensure_service()
    _echo_json(service.get_statistics().to_dict())


@migrate_app.command("validate", help="Check every stored combination for integrity")
def migrate_validate(ctx: typer.Context) -> None:
    service = _get_state(ctx).ensure_service()
    result = service.validate_migrated_data()
    _echo_json(result.to_dict())
    if not result.success:
        _exit(1)


@migrate_app.command("backup", help="Snapshot legacy records without migrating")
def migrate_backup(ctx: typer.Context) -> None:
    service = _get_state(ctx).ensure_service()
    if not service.create_backup():
        _exit(1)


@app.command(help="Run the migration admin API server")
def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="Bind address (defaults to [web].host)"),
    port: int | None = typer.Option(None, help="Bind port (defaults to [web].port)"),
) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()
    web = config.web or WebConfig()
    app_instance = create_app(state.ensure_service(), config)
    logger.info("Serving migration admin API on {}:{}", host or web.host, port or web.port)
    uvicorn.run(app_instance, host=host or web.host, port=port or web.port)


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:  # pragma: no cover - Typer translates exit codes
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
