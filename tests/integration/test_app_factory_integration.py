"""
Application factory integration tests.

Builds the real application against local filesystem storage with the
media service management API left unconfigured.
"""

from unittest.mock import patch

import pytest

from app_factory import create_app
from media_orchestrator.application import ManifestService
from media_orchestrator.config.settings import Settings
from media_orchestrator.domain.encoding import IMediaServicesRepository
from media_orchestrator.domain.streaming import IStreamingRepository
from media_orchestrator.infrastructure.rest_media_services_repository import (
    UnconfiguredStreamingRepository,
)

UNSET_ENV = (
    "MEDIA_SERVICES_SUBSCRIPTION_ID",
    "MEDIA_SERVICES_RESOURCE_GROUP",
    "MEDIA_SERVICES_ACCOUNT_NAME",
    "MEDIA_SERVICES_ACCESS_TOKEN",
    "TOKEN_SIGNING_KEY",
)


@pytest.fixture
def storage_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("GCS_BUCKET_NAME", raising=False)
    monkeypatch.setenv("ASSET_STORAGE_DIR", str(tmp_path / "assets"))
    for name in UNSET_ENV:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "assets"


@pytest.fixture
def app(storage_dir):
    return create_app(Settings())


class TestAppFactory:

    def test_services_are_registered(self, app):
        assert app.container is not None
        assert app.container.is_registered(ManifestService)
        assert not app.container.is_registered(IMediaServicesRepository)
        assert isinstance(app.container.resolve(IStreamingRepository), UnconfiguredStreamingRepository)

    def test_api_blueprint_is_registered(self, app):
        rules = [rule.rule for rule in app.url_map.iter_rules()]
        assert any(rule.startswith("/api/v1/manifests") for rule in rules)
        assert any(rule.startswith("/api/v1/jobs") for rule in rules)

    def test_multiple_app_instances(self, storage_dir):
        app1 = create_app(Settings())
        app2 = create_app(Settings())

        assert app1 is not app2
        assert app1.container is not app2.container

    def test_health_endpoint(self, app):
        with patch("app_factory.redis_health_check", return_value=True):
            response = app.test_client().get("/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "ok"
        assert data["media_services"] == "not_configured"

    def test_health_degraded_without_redis(self, app):
        with patch("app_factory.redis_health_check", return_value=False):
            response = app.test_client().get("/health")

        assert response.status_code == 503
        assert response.get_json()["redis"] == "disconnected"


class TestReconciliationThroughApi:

    def test_asset_without_streaming_locator(self, app, storage_dir):
        asset_dir = storage_dir / "asset-1"
        asset_dir.mkdir(parents=True)
        (asset_dir / "movie_1080.mp4").write_bytes(b"\x00")

        response = app.test_client().post("/api/v1/manifests/asset-1", json={})

        assert response.status_code == 502
        assert response.get_json()["error"] == "client_manifest_unavailable"
        # The generated server manifest is uploaded before the lookup
        assert (asset_dir / "movie_1080.ism").is_file()
        assert not (asset_dir / "movie_1080.ismc").exists()

    def test_empty_asset_succeeds_with_no_manifests(self, app):
        response = app.test_client().post("/api/v1/manifests/asset-2", json={})

        assert response.status_code == 200
        assert response.get_json() == {"asset_name": "asset-2", "server_manifests": []}

    def test_token_issuance_not_configured(self, app):
        response = app.test_client().post(
            "/api/v1/content-protection/tokens", json={"key_identifier": "key-1"}
        )

        assert response.status_code == 503
