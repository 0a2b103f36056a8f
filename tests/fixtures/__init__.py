"""
Test fixtures package.

Provides factory functions and in-memory repository implementations for testing.
"""

from .domain_fixtures import (
    create_asset_output_data,
    create_error_data,
    create_job_data,
    create_output_event,
    create_smooth_path,
    create_streaming_endpoint,
    create_streaming_locator,
    publish_asset,
)
from .mock_repositories import (
    MockAssetContainer,
    MockContainerAccessRepository,
    MockManifestDownloader,
    MockMediaServicesRepository,
    MockStreamingRepository,
)

__all__ = [
    "create_asset_output_data",
    "create_error_data",
    "create_job_data",
    "create_output_event",
    "create_smooth_path",
    "create_streaming_endpoint",
    "create_streaming_locator",
    "publish_asset",
    "MockAssetContainer",
    "MockContainerAccessRepository",
    "MockManifestDownloader",
    "MockMediaServicesRepository",
    "MockStreamingRepository",
]
