"""
Manifests Domain

Server (.ism) and client (.ismc) manifest generation, rewriting and
reconciliation.
"""

from .generator import IServerManifestGenerator, SmilServerManifestGenerator
from .services import ManifestReconciler
from .value_objects import (
    GeneratedServerManifest,
    ManifestPair,
    client_manifest_name_for,
    is_client_manifest,
    is_server_manifest,
)
from .xml_manifest import (
    add_client_manifest_to_server_manifest,
    get_client_manifest_reference,
    has_protection_node,
    remove_protection_node,
)

__all__ = [
    "GeneratedServerManifest",
    "IServerManifestGenerator",
    "ManifestPair",
    "ManifestReconciler",
    "SmilServerManifestGenerator",
    "add_client_manifest_to_server_manifest",
    "client_manifest_name_for",
    "get_client_manifest_reference",
    "has_protection_node",
    "is_client_manifest",
    "is_server_manifest",
    "remove_protection_node",
]
