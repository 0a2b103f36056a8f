"""
Asset Container Contract Tests

Shared behaviour every IAssetContainer implementation must provide. The
suite runs against the local filesystem container and the in-memory
container used throughout the unit tests, so the two cannot drift apart.
"""

from datetime import datetime, timedelta, timezone

import pytest

from media_orchestrator.domain.file_storage import ContainerPermission, IAssetContainer
from media_orchestrator.infrastructure.local_asset_container_repository import (
    LocalContainerAccessRepository,
)
from tests.fixtures import MockContainerAccessRepository


def _local_container(tmp_path):
    repository = LocalContainerAccessRepository(str(tmp_path))
    return repository.open_container(
        "asset-1",
        ContainerPermission.READ_WRITE,
        datetime.now(timezone.utc) + timedelta(minutes=5),
    )


def _memory_container(tmp_path):
    repository = MockContainerAccessRepository()
    return repository.open_container(
        "asset-1",
        ContainerPermission.READ_WRITE,
        datetime.now(timezone.utc) + timedelta(minutes=5),
    )


@pytest.fixture(params=[_local_container, _memory_container], ids=["local", "memory"])
def container(request, tmp_path) -> IAssetContainer:
    return request.param(tmp_path / "storage")


class TestAssetContainerContract:

    def test_new_container_is_empty(self, container):
        assert container.list_blob_names() == []

    def test_name_and_grant(self, container):
        assert container.name == "asset-1"
        assert container.grant.permissions.allows_write()
        assert not container.grant.is_expired()

    def test_upload_then_download_text(self, container):
        container.upload_text("movie.ismc", "<SmoothStreamingMedia />")

        assert container.download_text("movie.ismc") == "<SmoothStreamingMedia />"
        assert container.list_blob_names() == ["movie.ismc"]

    def test_upload_text_overwrites(self, container):
        container.upload_text("movie.ism", "first")
        container.upload_text("movie.ism", "second")

        assert container.download_text("movie.ism") == "second"
        assert container.list_blob_names() == ["movie.ism"]

    def test_upload_file(self, container, tmp_path):
        local_file = tmp_path / "staged.ism"
        local_file.write_text("<smil />", encoding="utf-8")

        container.upload_file(str(local_file), "movie.ism")

        assert container.download_text("movie.ism") == "<smil />"

    def test_download_missing_blob(self, container):
        with pytest.raises(FileNotFoundError):
            container.download_text("missing.ism")

    def test_text_is_utf8(self, container):
        container.upload_text("movie.ism", "<smil title=\"café\" />")

        assert container.download_text("movie.ism") == "<smil title=\"café\" />"
