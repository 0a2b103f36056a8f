"""
Server Manifest Generation

Renders a SMIL 2.0 server manifest (.ism) for the MP4 renditions in an
asset container.
"""

import os
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Optional

from media_orchestrator.domain.file_storage import IAssetContainer

from .value_objects import GeneratedServerManifest, client_manifest_name_for
from .xml_manifest import CLIENT_MANIFEST_META, SMIL_NAMESPACE, serialize_manifest

MP4_EXTENSION = ".mp4"
MP4_FORMAT = "mp4-v3"


def _smil(tag: str) -> str:
    return f"{{{SMIL_NAMESPACE}}}{tag}"


class IServerManifestGenerator(ABC):
    """Produces the server manifest to upload for an asset container."""

    @abstractmethod
    def generate(self, container: IAssetContainer) -> Optional[GeneratedServerManifest]:
        """
        Generate a server manifest for the container.

        Returns:
            The manifest to upload, or None when there is nothing to generate
        """
        pass  # pragma: no cover


class SmilServerManifestGenerator(IServerManifestGenerator):
    """
    Default generator: one <video> per MP4 rendition and one <audio> track
    taken from the first rendition.

    MP4 blobs are ordered case-insensitively by name; the manifest is named
    after the first one. When the paired client manifest already exists the
    generated document links it, so regenerating over a reconciled
    container leaves the link in place.
    """

    def generate(self, container: IAssetContainer) -> Optional[GeneratedServerManifest]:
        blob_names = container.list_blob_names()
        renditions = sorted(
            (name for name in blob_names if name.lower().endswith(MP4_EXTENSION)),
            key=str.lower,
        )
        if not renditions:
            return None

        stem = os.path.splitext(os.path.basename(renditions[0]))[0]
        file_name = stem + ".ism"
        client_manifest = client_manifest_name_for(file_name)
        has_client_manifest = any(
            name.casefold() == client_manifest.casefold() for name in blob_names
        )

        root = ET.Element(_smil("smil"))
        head = ET.SubElement(root, _smil("head"))
        ET.SubElement(head, _smil("meta"), {"name": "formats", "content": MP4_FORMAT})
        if has_client_manifest:
            ET.SubElement(
                head,
                _smil("meta"),
                {"name": CLIENT_MANIFEST_META, "content": client_manifest},
            )

        body = ET.SubElement(root, _smil("body"))
        switch = ET.SubElement(body, _smil("switch"))
        for rendition in renditions:
            ET.SubElement(switch, _smil("video"), {"src": rendition})
        ET.SubElement(switch, _smil("audio"), {"src": renditions[0], "title": stem})

        return GeneratedServerManifest(
            file_name=file_name,
            content=serialize_manifest(root, pretty=True),
        )
