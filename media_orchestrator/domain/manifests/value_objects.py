"""
Manifest Value Objects

Server (.ism) and client (.ismc) manifest naming rules.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

SERVER_MANIFEST_EXTENSION = ".ism"
CLIENT_MANIFEST_EXTENSION = ".ismc"


def is_manifest_file(blob_name: str) -> bool:
    """Check if a blob is a server or client manifest (contains '.ism')."""
    return SERVER_MANIFEST_EXTENSION in blob_name.lower()


def is_server_manifest(blob_name: str) -> bool:
    """Case-insensitive '.ism' suffix match."""
    return blob_name.lower().endswith(SERVER_MANIFEST_EXTENSION)


def is_client_manifest(blob_name: str) -> bool:
    """Case-insensitive '.ismc' substring match."""
    return CLIENT_MANIFEST_EXTENSION in blob_name.lower()


def client_manifest_name_for(server_manifest_name: str) -> str:
    """
    Client manifest name paired with a server manifest.

    The stem is the text before the first '.', so 'movie.1080p.ism'
    pairs with 'movie.ismc'.
    """
    stem = server_manifest_name.split(".", 1)[0]
    return stem + CLIENT_MANIFEST_EXTENSION


def manifest_files(blob_names: Iterable[str]) -> List[str]:
    """Filter a container listing down to manifest files, keeping order."""
    return [name for name in blob_names if is_manifest_file(name)]


@dataclass(frozen=True)
class GeneratedServerManifest:
    """Server manifest rendered from a template, ready for upload."""
    file_name: str
    content: str

    def __post_init__(self):
        if not is_server_manifest(self.file_name):
            raise ValueError(f"Server manifest name must end with .ism: {self.file_name}")


@dataclass(frozen=True)
class ManifestPair:
    """
    The server manifest of a container and its client manifest, if any.

    Built from a container listing: the first '.ism' and the first '.ismc'
    in listing order.
    """
    server_manifest: Optional[str]
    client_manifest: Optional[str]

    @classmethod
    def from_blob_names(cls, blob_names: Iterable[str]) -> "ManifestPair":
        manifests = manifest_files(blob_names)
        server = next((n for n in manifests if is_server_manifest(n)), None)
        client = next((n for n in manifests if is_client_manifest(n)), None)
        return cls(server_manifest=server, client_manifest=client)

    def needs_client_manifest(self) -> bool:
        """A server manifest exists but no client manifest does."""
        return self.server_manifest is not None and self.client_manifest is None
