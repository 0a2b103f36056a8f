"""
Unit tests for ManifestService.

Tests that reconciliation failures are reported per asset as
ReconciliationResult values and mapped to the right error category.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from media_orchestrator.application import ManifestService, ReconciliationResult
from media_orchestrator.domain.errors import (
    ClientManifestNotFoundError,
    ContainerAccessError,
    EmptyClientManifestError,
    ErrorCategory,
    ManifestFormatError,
    MediaServicesError,
)
from media_orchestrator.domain.file_storage import ContainerPermission
from media_orchestrator.domain.manifests import ManifestReconciler
from tests.fixtures import MockContainerAccessRepository

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def access_repo():
    return MockContainerAccessRepository()


@pytest.fixture
def reconciler():
    mock = Mock(spec=ManifestReconciler)
    mock.reconcile.return_value = ["movie.ism"]
    return mock


@pytest.fixture
def service(access_repo, reconciler):
    return ManifestService(access_repo, reconciler, grant_ttl_minutes=5, clock=lambda: NOW)


class TestReconcileAssetManifests:

    def test_success(self, service, reconciler, access_repo):
        result = service.reconcile_asset_manifests("asset-1", "locator-1")

        assert result.success is True
        assert result.server_manifests == ["movie.ism"]
        container = access_repo.containers["asset-1"]
        reconciler.reconcile.assert_called_once_with(container, "asset-1", "locator-1")

    def test_opens_container_with_short_lived_write_grant(self, service, access_repo):
        service.reconcile_asset_manifests("asset-1")

        call = access_repo.get_call_history()[0]
        assert call["args"]["permissions"] == ContainerPermission.READ_WRITE_DELETE
        assert call["args"]["expires_at"] == NOW + timedelta(minutes=5)

    def test_empty_asset_name(self, service, access_repo):
        result = service.reconcile_asset_manifests("")

        assert result.success is False
        assert result.error_type == ErrorCategory.INVALID_REQUEST
        assert access_repo.get_call_history() == []

    def test_grant_failure(self, service, access_repo, reconciler):
        access_repo.error = ContainerAccessError("signing failed")

        result = service.reconcile_asset_manifests("asset-1")

        assert result.error_type == ErrorCategory.STORAGE_UNAVAILABLE
        assert result.error_message == "signing failed"
        reconciler.reconcile.assert_not_called()

    @pytest.mark.parametrize(
        "error, category",
        [
            (ClientManifestNotFoundError("no locator"), ErrorCategory.CLIENT_MANIFEST_UNAVAILABLE),
            (MediaServicesError("503 from management API"), ErrorCategory.CLIENT_MANIFEST_UNAVAILABLE),
            (EmptyClientManifestError("empty"), ErrorCategory.MANIFEST_RECONCILIATION_FAILED),
            (ManifestFormatError("bad xml"), ErrorCategory.MANIFEST_RECONCILIATION_FAILED),
            (FileNotFoundError("movie.ism"), ErrorCategory.MANIFEST_RECONCILIATION_FAILED),
            (ContainerAccessError("expired"), ErrorCategory.STORAGE_UNAVAILABLE),
            (IOError("upload failed"), ErrorCategory.STORAGE_UNAVAILABLE),
            (RuntimeError("unexpected"), ErrorCategory.SYSTEM_ERROR),
        ],
    )
    def test_reconciler_failures_are_categorized(self, service, reconciler, error, category):
        reconciler.reconcile.side_effect = error

        result = service.reconcile_asset_manifests("asset-1")

        assert result.success is False
        assert result.asset_name == "asset-1"
        assert result.error_type == category

    def test_failure_of_one_asset_does_not_affect_the_next(self, service, reconciler):
        reconciler.reconcile.side_effect = [ClientManifestNotFoundError("no locator"), ["b.ism"]]

        first = service.reconcile_asset_manifests("asset-a")
        second = service.reconcile_asset_manifests("asset-b")

        assert first.success is False
        assert second.success is True
        assert second.server_manifests == ["b.ism"]


class TestReconciliationResult:

    def test_success_to_dict(self):
        data = ReconciliationResult.create_success("a", ["a.ism"]).to_dict()

        assert data == {
            "success": True,
            "asset_name": "a",
            "server_manifests": ["a.ism"],
            "error_message": None,
            "error_type": None,
        }

    def test_failure_to_dict(self):
        data = ReconciliationResult.create_failure(
            "a", ErrorCategory.STORAGE_UNAVAILABLE, "expired"
        ).to_dict()

        assert data["success"] is False
        assert data["error_type"] == "storage_unavailable"
        assert data["server_manifests"] == []
