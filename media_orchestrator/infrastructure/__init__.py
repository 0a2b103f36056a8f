"""
Infrastructure Layer

Adapters for storage, streaming endpoints and the media service management API.
"""

from .http_manifest_downloader import HttpManifestDownloader
from .local_asset_container_repository import (
    LocalAssetContainer,
    LocalContainerAccessRepository,
)
from .rest_media_services_repository import RestMediaServicesRepository
from .storage_factory import StorageFactory

__all__ = [
    'HttpManifestDownloader',
    'LocalAssetContainer',
    'LocalContainerAccessRepository',
    'RestMediaServicesRepository',
    'StorageFactory',
]
