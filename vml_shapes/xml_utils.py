"""
Namespace-agnostic helpers for walking ElementTree nodes.
"""

import xml.etree.ElementTree as ET
from typing import Iterator, Optional, Tuple

from .units import LengthUsage, convert_length


NS = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "v": "urn:schemas-microsoft-com:vml",
    "o": "urn:schemas-microsoft-com:office:office",
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}


def local_name(name: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags and attributes."""
    if "}" in name:
        return name.split("}", 1)[1]
    return name


def attrs(element: ET.Element) -> Iterator[Tuple[str, str]]:
    """Yield ``(local_name, value)`` for every attribute of the element."""
    for name, value in element.attrib.items():
        yield local_name(name), value


def elements(element: ET.Element) -> Iterator[ET.Element]:
    """Yield direct child elements, skipping comments and processing instructions."""
    for child in element:
        if isinstance(child.tag, str):
            yield child


def attr(element: ET.Element, name: str) -> Optional[str]:
    """Return the first attribute whose local name matches, whatever its namespace."""
    for key, value in attrs(element):
        if key == name:
            return value
    return None


def length_attr(element: ET.Element, name: str, usage: LengthUsage = LengthUsage.DXA) -> Optional[str]:
    return convert_length(attr(element, name), usage)
