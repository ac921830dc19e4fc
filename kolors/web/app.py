"""FastAPI application factory exposing the migration admin API."""

from __future__ import annotations

import secrets
from typing import Any, Callable

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, status
from fastapi.responses import JSONResponse
from loguru import logger

from kolors.config.app import AppConfig
from kolors.config.web import WebAuthConfig
from kolors.exceptions import LegacySourceError
from kolors.migration import ALREADY_IN_PROGRESS, MigrationResult, MigrationService


def create_app(migration_service: MigrationService, config: AppConfig | None = None) -> FastAPI:
    """Creates and configures a FastAPI application around ``migration_service``."""
    web_config = config.web if config and config.web else None
    auth_config = web_config.auth if web_config and web_config.auth else None
    auth_dependency = _build_auth_dependency(auth_config)
    backup_first = config.migration.backup_before_migration if config else True

    app = FastAPI(
        title=web_config.title if web_config else "Kolors Migration API",
        description="Admin API for migrating legacy single-colour records into combinations.",
        version="0.1.0",
    )
    router = APIRouter(
        prefix="/admin/migration/api",
        tags=["Migration"],
        dependencies=[Depends(auth_dependency)],
    )

    @app.get("/health", summary="Health Check", tags=["Monitoring"])
    async def health_check() -> dict[str, str]:
        """Check if the API is running."""
        return {"status": "ok"}

    @router.get("/statistics", summary="Migration statistics")
    def get_statistics() -> dict[str, Any]:
        return migration_service.get_statistics().to_dict()

    @router.get("/legacy-data-check", summary="Check for legacy data")
    def legacy_data_check() -> dict[str, Any]:
        has_legacy_data = migration_service.is_legacy_data_present()
        current = migration_service.get_status()
        return {
            "hasLegacyData": has_legacy_data,
            "migrationStatus": current.value,
            "migrationNeeded": has_legacy_data and not current.is_completed() and not current.is_in_progress(),
        }

    @router.get("/status", summary="Current status and last result")
    def get_status() -> dict[str, Any]:
        last = migration_service.get_last_result()
        current = migration_service.get_status()
        return {
            "migrationStatus": current.value,
            "description": current.description,
            "lastResult": last.to_dict() if last else None,
        }

    @router.post("/migrate", summary="Run the legacy migration")
    def migrate() -> JSONResponse:
        """
        Runs the migration synchronously and returns its result.
        """
        logger.info("Starting migration via REST API")
        if migration_service.get_status().is_in_progress():
            return _result_response(_error_result(ALREADY_IN_PROGRESS), status.HTTP_400_BAD_REQUEST)

        if backup_first and not migration_service.create_backup():
            logger.warning("Failed to create backup, but proceeding with migration")

        try:
            result = migration_service.migrate()
        except LegacySourceError as exc:
            logger.error("Migration failed via REST API: {}", exc)
            return _result_response(
                _error_result(f"Migration failed: {exc}"),
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        # Another request may have started a run after the check above.
        if result.rejected:
            return _result_response(result, status.HTTP_400_BAD_REQUEST)
        return _result_response(result, status.HTTP_200_OK)

    @router.post("/validate", summary="Validate stored combinations")
    def validate() -> dict[str, Any]:
        return migration_service.validate_migrated_data().to_dict()

    @router.post("/reset", summary="Reset the migration status")
    def reset() -> dict[str, str]:
        if not migration_service.reset_status():
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_IN_PROGRESS)
        return {"status": "success", "message": "Migration status reset successfully"}

    app.include_router(router)
    return app


def _error_result(message: str) -> MigrationResult:
    result = MigrationResult(success=False)
    result.add_error(message)
    return result.complete()


def _result_response(result: MigrationResult, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=result.to_dict())


def _build_auth_dependency(auth_config: WebAuthConfig | None) -> Callable[..., Any]:
    """Return a dependency that validates the configured auth token."""

    if not auth_config or not auth_config.enabled:
        async def _no_auth() -> None:  # pragma: no cover - trivial branch
            return None

        return _no_auth

    expected_token = auth_config.resolved_token()
    header_alias = auth_config.header_name

    async def _verify_token(
        provided_token: str | None = Header(default=None, alias=header_alias),
    ) -> None:
        if provided_token is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Missing authentication token.",
            )

        if not secrets.compare_digest(provided_token, expected_token):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication token.",
            )

    return _verify_token
