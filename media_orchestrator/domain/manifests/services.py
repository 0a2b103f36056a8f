"""
Manifest Services

Domain service that brings an asset container's streaming manifests into a
consistent state after encoding.
"""

import os
import tempfile
from typing import List, Optional

from media_orchestrator.domain.errors import EmptyClientManifestError
from media_orchestrator.domain.file_storage import IAssetContainer
from media_orchestrator.domain.streaming import StreamingUriResolver

from .generator import IServerManifestGenerator
from .value_objects import ManifestPair, client_manifest_name_for, is_server_manifest
from .xml_manifest import (
    add_client_manifest_to_server_manifest,
    has_protection_node,
    parse_manifest,
    remove_protection_node,
    serialize_manifest,
)


class ManifestReconciler:
    """
    Domain service for manifest reconciliation.

    Uploads a freshly generated server manifest, then makes sure a client
    manifest exists next to it and that the server manifest links it.
    """

    def __init__(
        self,
        manifest_generator: IServerManifestGenerator,
        uri_resolver: StreamingUriResolver,
    ):
        """
        Initialize ManifestReconciler.

        Args:
            manifest_generator: Produces the server manifest for a container
            uri_resolver: Fetches the published client manifest of an asset
        """
        self.manifest_generator = manifest_generator
        self.uri_resolver = uri_resolver

    def reconcile(
        self,
        container: IAssetContainer,
        asset_name: str,
        locator_name: Optional[str] = None,
    ) -> List[str]:
        """
        Reconcile the manifests of an asset container.

        Args:
            container: Container opened with write access
            asset_name: Asset whose client manifest is fetched when missing
            locator_name: Preferred streaming locator, if any

        Returns:
            Server manifest names present in the container afterwards

        Raises:
            ClientManifestNotFoundError: If the client manifest must be
                fetched and no streaming URI yields it
            EmptyClientManifestError: If the fetched client manifest is empty
            ManifestFormatError: If a manifest document is malformed
            ContainerAccessError: If the container grant has expired
        """
        self._upload_generated_manifest(container)

        pair = ManifestPair.from_blob_names(container.list_blob_names())
        if pair.needs_client_manifest():
            self._create_client_manifest(container, pair.server_manifest, asset_name, locator_name)

        return [name for name in container.list_blob_names() if is_server_manifest(name)]

    def _upload_generated_manifest(self, container: IAssetContainer) -> None:
        generated = self.manifest_generator.generate(container)
        if generated is None:
            return

        document = serialize_manifest(parse_manifest(generated.content), pretty=True)

        # Staging directory is removed on every exit path
        with tempfile.TemporaryDirectory(prefix="ism-") as staging_dir:
            local_path = os.path.join(staging_dir, os.path.basename(generated.file_name))
            with open(local_path, "w", encoding="utf-8") as f:
                f.write(document)
            container.upload_file(local_path, generated.file_name)

    def _create_client_manifest(
        self,
        container: IAssetContainer,
        server_manifest: str,
        asset_name: str,
        locator_name: Optional[str],
    ) -> None:
        client_xml = self.uri_resolver.get_client_manifest(asset_name, locator_name)
        if client_xml is None or not client_xml.strip():
            raise EmptyClientManifestError(f"Client manifest for asset {asset_name} is empty")

        if has_protection_node(client_xml):
            client_xml = remove_protection_node(client_xml)

        client_manifest = client_manifest_name_for(server_manifest)

        # Build the linked server manifest before writing anything so a
        # malformed .ism leaves the container untouched
        linked_server_xml = add_client_manifest_to_server_manifest(
            container.download_text(server_manifest), client_manifest
        )

        container.upload_text(client_manifest, client_xml)
        container.upload_text(server_manifest, linked_server_xml)
