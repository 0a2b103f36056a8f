"""
Streaming Domain

Locator and endpoint selection for building smooth streaming URIs.
"""

from .repositories import IManifestDownloader, IStreamingRepository
from .services import (
    StreamingUriResolver,
    select_streaming_endpoint,
    select_streaming_locator,
)
from .value_objects import (
    LiveOutput,
    SmoothStreamingUri,
    StreamingEndpoint,
    StreamingEndpointResourceState,
    StreamingLocator,
    StreamingPath,
    StreamingProtocol,
)

__all__ = [
    "IManifestDownloader",
    "IStreamingRepository",
    "LiveOutput",
    "SmoothStreamingUri",
    "StreamingEndpoint",
    "StreamingEndpointResourceState",
    "StreamingLocator",
    "StreamingPath",
    "StreamingProtocol",
    "StreamingUriResolver",
    "select_streaming_endpoint",
    "select_streaming_locator",
]
