from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from kolors.config import AppConfig, WebAuthConfig, WebConfig
from kolors.migration import MigrationService, MigrationStatus
from kolors.models import LegacyRecord
from kolors.storage import InMemoryCombinationStore, InMemoryLegacySource, LegacySource
from kolors.web import create_app

from tests.utils import make_records

API = "/admin/migration/api"


class _BrokenSource(LegacySource):
    def list_all(self) -> list[LegacyRecord]:
        raise OSError("legacy database offline")

    def count(self) -> int:
        raise OSError("legacy database offline")


@pytest.fixture()
def migration_service() -> MigrationService:
    source = InMemoryLegacySource(make_records(("Red Color", "FF0000"), ("AB", "00FF00"), ("Name", "GGGGGG")))
    return MigrationService(source, InMemoryCombinationStore())


@pytest.fixture()
def client(migration_service: MigrationService) -> TestClient:
    return TestClient(create_app(migration_service))


def test_health_check(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_statistics_before_migration(client: TestClient) -> None:
    response = client.get(f"{API}/statistics")
    assert response.status_code == 200
    payload = response.json()
    assert payload["legacyRecordCount"] == 3
    assert payload["singleColorCombinationCount"] == 0
    assert payload["migrationStatus"] == "NOT_STARTED"
    assert payload["migrationProgress"] == 0.0
    assert payload["migrationNeeded"] is True


def test_legacy_data_check(client: TestClient) -> None:
    response = client.get(f"{API}/legacy-data-check")
    assert response.status_code == 200
    assert response.json() == {
        "hasLegacyData": True,
        "migrationStatus": "NOT_STARTED",
        "migrationNeeded": True,
    }


def test_migrate_then_status(client: TestClient) -> None:
    response = client.post(f"{API}/migrate")
    assert response.status_code == 200
    result = response.json()
    assert result["success"] is True
    assert result["migratedRecords"] == 1
    assert result["failedRecords"] == 2
    assert len(result["errors"]) == 2

    status_response = client.get(f"{API}/status")
    assert status_response.status_code == 200
    payload = status_response.json()
    assert payload["migrationStatus"] == "COMPLETED_WITH_ERRORS"
    assert payload["description"] == "Migration completed with errors"
    assert payload["lastResult"]["migratedRecords"] == 1

    check = client.get(f"{API}/legacy-data-check").json()
    assert check["migrationNeeded"] is False


def test_migrate_while_in_progress(client: TestClient, migration_service: MigrationService) -> None:
    migration_service._status = MigrationStatus.IN_PROGRESS

    response = client.post(f"{API}/migrate")

    assert response.status_code == 400
    assert response.json()["errors"] == ["Migration is already in progress"]
    assert response.json()["success"] is False


def test_migrate_with_unreadable_source() -> None:
    service = MigrationService(_BrokenSource(), InMemoryCombinationStore())
    client = TestClient(create_app(service))

    response = client.post(f"{API}/migrate")

    assert response.status_code == 500
    payload = response.json()
    assert payload["success"] is False
    assert payload["errors"][0].startswith("Migration failed:")
    assert service.get_status() is MigrationStatus.FAILED


def test_validate_endpoint(client: TestClient) -> None:
    client.post(f"{API}/migrate")

    response = client.post(f"{API}/validate")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["migratedRecords"] == 1
    assert payload["errors"] == []


def test_reset_endpoint(client: TestClient, migration_service: MigrationService) -> None:
    client.post(f"{API}/migrate")

    response = client.post(f"{API}/reset")

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Migration status reset successfully"}
    assert migration_service.get_status() is MigrationStatus.NOT_STARTED
    assert client.get(f"{API}/status").json()["lastResult"] is None


def test_reset_refused_while_in_progress(client: TestClient, migration_service: MigrationService) -> None:
    migration_service._status = MigrationStatus.IN_PROGRESS

    response = client.post(f"{API}/reset")

    assert response.status_code == 409


@pytest.fixture()
def secured_client(migration_service: MigrationService) -> TestClient:
    config = AppConfig(
        web=WebConfig(auth=WebAuthConfig(enabled=True, header_name="X-Admin-Token", token="s3cret")),
    )
    return TestClient(create_app(migration_service, config))


def test_auth_missing_token(secured_client: TestClient) -> None:
    response = secured_client.get(f"{API}/statistics")
    assert response.status_code == 401
    assert response.json() == {"detail": "Missing authentication token."}


def test_auth_invalid_token(secured_client: TestClient) -> None:
    response = secured_client.get(f"{API}/statistics", headers={"X-Admin-Token": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid authentication token."}


def test_auth_valid_token(secured_client: TestClient) -> None:
    response = secured_client.get(f"{API}/statistics", headers={"X-Admin-Token": "s3cret"})
    assert response.status_code == 200


def test_health_is_not_protected(secured_client: TestClient) -> None:
    assert secured_client.get("/health").status_code == 200


class _RacingService(MigrationService):
    """A second run starts while this request is still taking its backup."""

    def create_backup(self) -> bool:
        with self._lock:
            self._status = MigrationStatus.IN_PROGRESS
        return True


def test_migrate_rejected_after_backup_race() -> None:
    source = InMemoryLegacySource(make_records(("Red Color", "FF0000")))
    service = _RacingService(source, InMemoryCombinationStore())
    client = TestClient(create_app(service))

    response = client.post(f"{API}/migrate")

    assert response.status_code == 400
    assert response.json()["errors"] == ["Migration is already in progress"]
    assert service.get_last_result() is None
