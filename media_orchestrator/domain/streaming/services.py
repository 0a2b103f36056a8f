"""
Streaming Services

Resolution of a playable smooth streaming URI for an asset.
"""

from typing import List, Optional

from media_orchestrator.domain.errors import (
    ClientManifestNotFoundError,
    ManifestDownloadError,
)

from .repositories import IManifestDownloader, IStreamingRepository
from .value_objects import (
    LiveOutput,
    SmoothStreamingUri,
    StreamingEndpoint,
    StreamingLocator,
    StreamingProtocol,
)


def select_streaming_endpoint(
    endpoints: List[StreamingEndpoint],
) -> Optional[StreamingEndpoint]:
    """
    Pick the endpoint used to build streaming URIs.

    Policy: the first running endpoint in listing order, otherwise the first
    endpoint in listing order. Listing order is unspecified by the service;
    it only decides which of several acceptable endpoints is used.
    """
    for endpoint in endpoints:
        if endpoint.is_running():
            return endpoint
    return endpoints[0] if endpoints else None


def select_streaming_locator(
    locators: List[StreamingLocator], locator_name: Optional[str] = None
) -> Optional[StreamingLocator]:
    """
    Pick the locator used to build streaming URIs.

    Policy: the locator named locator_name when given (None if the asset
    has no such locator), otherwise the first locator in listing order.
    """
    if not locators:
        return None
    if locator_name is None:
        return locators[0]
    for locator in locators:
        if locator.name == locator_name:
            return locator
    return None


class StreamingUriResolver:
    """
    Domain service resolving smooth streaming URIs and client manifests.

    A missing locator or endpoint is a valid negative result (None), not
    an error.
    """

    def __init__(
        self,
        streaming_repository: IStreamingRepository,
        manifest_downloader: IManifestDownloader,
        scheme: str = "https",
    ):
        """
        Initialize StreamingUriResolver.

        Args:
            streaming_repository: Locator, endpoint and path lookups
            manifest_downloader: Fetches manifests from endpoints
            scheme: URI scheme used with endpoint host names
        """
        self.streaming_repo = streaming_repository
        self.manifest_downloader = manifest_downloader
        self.scheme = scheme

    def resolve_smooth_streaming_uri(
        self,
        asset_name: str,
        locator_name: Optional[str] = None,
        live_output: Optional[LiveOutput] = None,
    ) -> Optional[SmoothStreamingUri]:
        """
        Resolve a smooth streaming manifest URI for an asset.

        Args:
            asset_name: Asset name
            locator_name: Preferred locator; defaults to the first listed locator
            live_output: Live output context, used when the protocol is
                advertised but no content has been produced yet

        Returns:
            SmoothStreamingUri, or None if no URI can be built
        """
        locators = self.streaming_repo.list_streaming_locators(asset_name)
        endpoint = select_streaming_endpoint(self.streaming_repo.list_streaming_endpoints())

        if not locators or endpoint is None:
            return None

        locator = select_streaming_locator(locators, locator_name)
        if locator is None:
            return None

        smooth_paths = [
            path
            for path in self.streaming_repo.list_streaming_paths(locator.name)
            if path.streaming_protocol == StreamingProtocol.SMOOTH_STREAMING
        ]

        with_content = [path for path in smooth_paths if path.has_paths()]
        if with_content:
            return SmoothStreamingUri(
                self._build_uri(endpoint, with_content[0].paths[0]),
                empty_live_output=False,
            )

        if smooth_paths and live_output is not None:
            path = (
                f"{locator.streaming_locator_id}/"
                f"{live_output.manifest_name}.ism/manifest"
            )
            return SmoothStreamingUri(
                self._build_uri(endpoint, path), empty_live_output=True
            )

        return None

    def get_client_manifest(
        self, asset_name: str, preferred_locator_name: Optional[str] = None
    ) -> str:
        """
        Fetch the client manifest of an asset through a streaming endpoint.

        Tries the preferred locator first, then the default locator.

        Returns:
            Client manifest document text

        Raises:
            ClientManifestNotFoundError: If no URI resolves or the download fails
        """
        resolved = self.resolve_smooth_streaming_uri(asset_name, preferred_locator_name)
        if resolved is None and preferred_locator_name is not None:
            resolved = self.resolve_smooth_streaming_uri(asset_name)

        if resolved is None:
            raise ClientManifestNotFoundError(
                f"No smooth streaming locator found for asset '{asset_name}'"
            )

        try:
            return self.manifest_downloader.fetch(resolved.uri)
        except ManifestDownloadError as e:
            raise ClientManifestNotFoundError(
                f"Could not read client manifest for asset '{asset_name}' from {resolved.uri}",
                original_error=e,
            ) from e

    def _build_uri(self, endpoint: StreamingEndpoint, path: str) -> str:
        return f"{self.scheme}://{endpoint.host_name}/{path.lstrip('/')}"

