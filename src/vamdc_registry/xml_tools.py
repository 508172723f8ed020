"""Helpers for navigating registry result documents.

Registry records mix a namespaced root (``ri:Resource``) with unqualified
children (``identifier``, ``capability``, ``interface``, ``accessURL``), so
elements are matched on local name only.
"""

from typing import List, Optional, Union

from lxml import etree
from rich.console import Console

XmlNode = Union[etree._ElementTree, etree._Element]


def _root_of(node: Optional[XmlNode]) -> Optional[etree._Element]:
    if node is None:
        return None
    if isinstance(node, etree._ElementTree):
        return node.getroot()
    return node


def local_name(element: etree._Element) -> Optional[str]:
    """Local part of an element's tag, or None for comments and PIs."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def find_elements(node: Optional[XmlNode], name: str) -> List[etree._Element]:
    """All descendants of the root with the given local name, in document order."""
    root = _root_of(node)
    if root is None:
        return []
    return [el for el in root.iterdescendants() if local_name(el) == name]


def extract_identifiers(document: Optional[XmlNode]) -> List[str]:
    """Text of every ``identifier`` element in document order.

    Duplicates are kept. A missing document or root yields an empty list.
    """
    identifiers = []
    for element in find_elements(document, "identifier"):
        identifiers.append((element.text or "").strip())
    return identifiers


def extract_access_url(document: Optional[XmlNode], capability_id: str) -> Optional[str]:
    """First access URL among the interfaces of the given capability.

    Interfaces of every capability with a matching ``standardID`` are scanned
    in document order; the first non-empty ``accessURL`` wins.

    Args:
        document: A registration document (or element) to search
        capability_id: The ``standardID`` of the capability of choice

    Returns:
        The URL, or None when no matching interface carries one
    """
    for interface in find_elements(document, "interface"):
        capability = interface.getparent()
        if local_name(capability) != "capability":
            continue
        if capability.get("standardID") != capability_id:
            continue
        for child in interface:
            if local_name(child) == "accessURL" and child.text and child.text.strip():
                return child.text.strip()
    return None


def serialize_to_string(node: XmlNode) -> str:
    return etree.tostring(node, pretty_print=True, encoding="unicode")


def serialize_to_stdout(node: XmlNode, console: Optional[Console] = None) -> None:
    """Dump a document or element for debugging."""
    console = console or Console()
    console.print(
        serialize_to_string(node),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )
