"""
Property-based tests for manifest naming and client manifest rewriting.
"""

from hypothesis import given

from media_orchestrator.domain.manifests import (
    client_manifest_name_for,
    has_protection_node,
    is_client_manifest,
    is_server_manifest,
    remove_protection_node,
)
from tests.property.strategies import client_manifests, server_manifest_names


@given(server_manifest_names())
def test_client_manifest_name_pairs_with_server_manifest(server_manifest):
    client_manifest = client_manifest_name_for(server_manifest)

    assert client_manifest.endswith(".ismc")
    assert is_client_manifest(client_manifest)
    assert not is_server_manifest(client_manifest)
    assert "." not in client_manifest[: -len(".ismc")]


@given(client_manifests())
def test_remove_protection_leaves_no_protection(ismc):
    assert not has_protection_node(remove_protection_node(ismc))


@given(client_manifests())
def test_remove_protection_is_idempotent(ismc):
    once = remove_protection_node(ismc)

    assert remove_protection_node(once) == once


@given(client_manifests())
def test_clear_manifest_is_returned_unchanged(ismc):
    if not has_protection_node(ismc):
        assert remove_protection_node(ismc) == ismc
