"""
Manifest XML Helpers

Parsing and rewriting of server (.ism, SMIL 2.0) and client (.ismc)
manifest documents. Element matching uses local names so documents with
or without a default namespace are handled alike.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from media_orchestrator.domain.errors import ManifestFormatError

SMIL_NAMESPACE = "http://www.w3.org/2001/SMIL20/Language"
CLIENT_MANIFEST_META = "clientManifestRelativePath"
PROTECTION_ELEMENT = "Protection"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

# Serialize SMIL elements with a default namespace instead of "ns0:"
ET.register_namespace("", SMIL_NAMESPACE)


def local_name(tag: str) -> str:
    """Tag name without its '{namespace}' prefix."""
    return tag.rsplit("}", 1)[-1]


def namespace_of(tag: str) -> Optional[str]:
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


def _qualified(tag: str, namespace: Optional[str]) -> str:
    return f"{{{namespace}}}{tag}" if namespace else tag


def parse_manifest(xml_text: str) -> ET.Element:
    """
    Parse a manifest document.

    Raises:
        ManifestFormatError: If the document is not well-formed XML
    """
    try:
        return ET.fromstring(xml_text.lstrip("\ufeff"))
    except ET.ParseError as e:
        raise ManifestFormatError(f"Manifest is not well-formed XML: {e}", original_error=e) from e


def serialize_manifest(root: ET.Element, pretty: bool = False) -> str:
    """
    Serialize a manifest element tree with an XML declaration.

    With pretty=True whitespace is normalized, so two trees with the same
    structure always serialize to the same text.
    """
    if pretty:
        ET.indent(root, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode")


def has_protection_node(ismc_xml: str) -> bool:
    """Check if a client manifest carries a Protection (DRM header) element."""
    root = parse_manifest(ismc_xml)
    return any(local_name(el.tag) == PROTECTION_ELEMENT for el in root.iter())


def remove_protection_node(ismc_xml: str) -> str:
    """
    Strip the Protection element from a client manifest.

    Only Protection elements are removed; everything else is kept as is.
    The input text is returned unchanged when there is nothing to strip.
    """
    root = parse_manifest(ismc_xml)
    removed = False
    for parent in list(root.iter()):
        for child in list(parent):
            if local_name(child.tag) == PROTECTION_ELEMENT:
                parent.remove(child)
                removed = True

    if not removed:
        return ismc_xml
    return serialize_manifest(root)


def _find_head(root: ET.Element) -> Optional[ET.Element]:
    for child in root:
        if local_name(child.tag) == "head":
            return child
    return None


def _find_client_manifest_meta(head: ET.Element) -> Optional[ET.Element]:
    for child in head:
        if local_name(child.tag) == "meta" and child.get("name") == CLIENT_MANIFEST_META:
            return child
    return None


def add_client_manifest_to_server_manifest(ism_xml: str, ismc_name: str) -> str:
    """
    Link a client manifest from a server manifest.

    Sets <meta name="clientManifestRelativePath" content="..."/> in the SMIL
    head, creating the head when missing and replacing an existing link.

    Args:
        ism_xml: Server manifest document
        ismc_name: Client manifest file name, relative to the container

    Returns:
        Updated server manifest document
    """
    root = parse_manifest(ism_xml)
    namespace = namespace_of(root.tag)

    head = _find_head(root)
    if head is None:
        head = ET.Element(_qualified("head", namespace))
        root.insert(0, head)

    meta = _find_client_manifest_meta(head)
    if meta is None:
        ET.SubElement(
            head,
            _qualified("meta", namespace),
            {"name": CLIENT_MANIFEST_META, "content": ismc_name},
        )
    else:
        meta.set("content", ismc_name)

    return serialize_manifest(root, pretty=True)


def get_client_manifest_reference(ism_xml: str) -> Optional[str]:
    """Client manifest file name linked from a server manifest, if any."""
    root = parse_manifest(ism_xml)
    head = _find_head(root)
    if head is None:
        return None
    meta = _find_client_manifest_meta(head)
    return meta.get("content") if meta is not None else None
