"""
Streaming Value Objects

Read-only descriptors of how an asset's stored content is exposed for streaming.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class StreamingProtocol(Enum):
    """Streaming protocol advertised by a streaming path."""
    HLS = "Hls"
    DASH = "Dash"
    SMOOTH_STREAMING = "SmoothStreaming"
    DOWNLOAD = "Download"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["StreamingProtocol"]:
        if value is None:
            return None
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        return None


class StreamingEndpointResourceState(Enum):
    """Resource state of a streaming endpoint."""
    STOPPED = "Stopped"
    STARTING = "Starting"
    RUNNING = "Running"
    STOPPING = "Stopping"
    DELETING = "Deleting"
    SCALING = "Scaling"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["StreamingEndpointResourceState"]:
        if value is None:
            return None
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        return None


@dataclass(frozen=True)
class StreamingLocator:
    """Published access path exposing an asset for streaming."""
    name: str
    streaming_locator_id: str
    asset_name: Optional[str] = None
    streaming_policy_name: Optional[str] = None
    default_content_key_policy_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "StreamingLocator":
        props = data.get("properties") if isinstance(data.get("properties"), dict) else data
        return cls(
            name=data.get("name", ""),
            streaming_locator_id=str(props.get("streamingLocatorId") or ""),
            asset_name=props.get("assetName"),
            streaming_policy_name=props.get("streamingPolicyName"),
            default_content_key_policy_name=props.get("defaultContentKeyPolicyName"),
        )


@dataclass(frozen=True)
class StreamingEndpoint:
    """Streaming endpoint of the media account."""
    name: str
    host_name: str
    resource_state: Optional[StreamingEndpointResourceState] = None

    def is_running(self) -> bool:
        return self.resource_state == StreamingEndpointResourceState.RUNNING

    @classmethod
    def from_dict(cls, data: dict) -> "StreamingEndpoint":
        props = data.get("properties") if isinstance(data.get("properties"), dict) else data
        return cls(
            name=data.get("name", ""),
            host_name=props.get("hostName", ""),
            resource_state=StreamingEndpointResourceState.parse(props.get("resourceState")),
        )


@dataclass(frozen=True)
class StreamingPath:
    """Relative paths available for one protocol of a locator."""
    streaming_protocol: Optional[StreamingProtocol]
    encryption_scheme: Optional[str] = None
    paths: Tuple[str, ...] = field(default_factory=tuple)

    def has_paths(self) -> bool:
        return len(self.paths) > 0

    @classmethod
    def from_dict(cls, data: dict) -> "StreamingPath":
        return cls(
            streaming_protocol=StreamingProtocol.parse(data.get("streamingProtocol")),
            encryption_scheme=data.get("encryptionScheme"),
            paths=tuple(data.get("paths") or ()),
        )


@dataclass(frozen=True)
class LiveOutput:
    """Live output context used to predict a manifest URI before content exists."""
    name: str
    manifest_name: str


class SmoothStreamingUri(NamedTuple):
    """
    Resolved smooth streaming manifest URI.

    empty_live_output is True when the URI was synthesized from a live
    output: the endpoint shape is known but no content was produced yet.
    """
    uri: str
    empty_live_output: bool = False
