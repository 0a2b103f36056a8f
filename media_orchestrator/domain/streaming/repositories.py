"""
Streaming Repositories

Capability interfaces for streaming lookups and manifest downloads.
Concrete implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List

from .value_objects import StreamingEndpoint, StreamingLocator, StreamingPath


class IStreamingRepository(ABC):
    """Read-only access to locators, endpoints and streaming paths."""

    @abstractmethod
    def list_streaming_locators(self, asset_name: str) -> List[StreamingLocator]:
        """
        List the streaming locators of an asset.

        Args:
            asset_name: Asset name

        Returns:
            Locators in listing order (order is not meaningful)
        """
        pass  # pragma: no cover

    @abstractmethod
    def list_streaming_endpoints(self) -> List[StreamingEndpoint]:
        """
        List the streaming endpoints of the media account.

        Returns:
            Endpoints in listing order (order is not meaningful)
        """
        pass  # pragma: no cover

    @abstractmethod
    def list_streaming_paths(self, locator_name: str) -> List[StreamingPath]:
        """
        List the streaming paths of a locator, one entry per protocol.

        Args:
            locator_name: Streaming locator name

        Returns:
            Streaming paths
        """
        pass  # pragma: no cover


class IManifestDownloader(ABC):
    """Fetches manifest documents from a streaming endpoint."""

    @abstractmethod
    def fetch(self, uri: str) -> str:
        """
        Download a manifest document.

        Args:
            uri: Absolute manifest URI

        Returns:
            Document text (may be empty)

        Raises:
            ManifestDownloadError: If the document cannot be downloaded
        """
        pass  # pragma: no cover
