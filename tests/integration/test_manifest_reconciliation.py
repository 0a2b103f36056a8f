"""
Manifest reconciliation against a local filesystem container.

Runs ManifestService with the real reconciler, generator and local storage;
only the streaming lookups and manifest download are in-memory.
"""

import pytest

from media_orchestrator.application import ManifestService
from media_orchestrator.domain.errors import ErrorCategory
from media_orchestrator.domain.manifests import (
    ManifestReconciler,
    SmilServerManifestGenerator,
    get_client_manifest_reference,
    has_protection_node,
)
from media_orchestrator.domain.streaming import StreamingUriResolver
from media_orchestrator.infrastructure.local_asset_container_repository import (
    LocalContainerAccessRepository,
)
from tests.fixtures import publish_asset


@pytest.fixture
def manifest_service(tmp_path, streaming_repository, manifest_downloader):
    reconciler = ManifestReconciler(
        SmilServerManifestGenerator(),
        StreamingUriResolver(streaming_repository, manifest_downloader),
    )
    return ManifestService(LocalContainerAccessRepository(str(tmp_path)), reconciler)


@pytest.fixture
def asset_dir(tmp_path):
    path = tmp_path / "asset-1"
    path.mkdir()
    (path / "movie_720.mp4").write_bytes(b"\x00\x01")
    (path / "Movie_1080.mp4").write_bytes(b"\x00\x01")
    return path


class TestLocalReconciliation:

    def test_full_reconciliation(
        self, manifest_service, streaming_repository, manifest_downloader,
        asset_dir, client_manifest_xml
    ):
        publish_asset(streaming_repository, manifest_downloader, "asset-1", client_manifest_xml)

        result = manifest_service.reconcile_asset_manifests("asset-1")

        assert result.success
        assert result.server_manifests == ["Movie_1080.ism"]

        ism = (asset_dir / "Movie_1080.ism").read_text(encoding="utf-8")
        ismc = (asset_dir / "Movie_1080.ismc").read_text(encoding="utf-8")
        assert get_client_manifest_reference(ism) == "Movie_1080.ismc"
        assert not has_protection_node(ismc)
        assert 'Duration="600000000"' in ismc

    def test_second_run_leaves_files_unchanged(
        self, manifest_service, streaming_repository, manifest_downloader,
        asset_dir, client_manifest_xml
    ):
        publish_asset(streaming_repository, manifest_downloader, "asset-1", client_manifest_xml)
        manifest_service.reconcile_asset_manifests("asset-1")
        first = {p.name: p.read_bytes() for p in asset_dir.iterdir()}

        result = manifest_service.reconcile_asset_manifests("asset-1")

        assert result.success
        assert {p.name: p.read_bytes() for p in asset_dir.iterdir()} == first
        assert len(manifest_downloader.fetched) == 1

    def test_unpublished_asset_keeps_generated_manifest_only(self, manifest_service, asset_dir):
        result = manifest_service.reconcile_asset_manifests("asset-1")

        assert not result.success
        assert result.error_type == ErrorCategory.CLIENT_MANIFEST_UNAVAILABLE
        assert (asset_dir / "Movie_1080.ism").is_file()
        assert get_client_manifest_reference(
            (asset_dir / "Movie_1080.ism").read_text(encoding="utf-8")
        ) is None
        assert not (asset_dir / "Movie_1080.ismc").exists()

    def test_invalid_asset_name(self, manifest_service):
        result = manifest_service.reconcile_asset_manifests("../escape")

        assert not result.success
        assert result.error_type == ErrorCategory.STORAGE_UNAVAILABLE
