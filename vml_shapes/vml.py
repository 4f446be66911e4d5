"""
Build shape trees from VML elements.

Everything here degrades gracefully: unknown tags produce no node, bad
measurements fall back to defaults and unexpected path characters are dropped.
"""

import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from .css import parse_css_rules
from .shape_node import ImageReference, ShapeKind, ShapeNode, SourceShape, StructuralChild
from .units import LengthUsage, convert_length
from .xml_utils import attr, attrs, elements, length_attr, local_name


class BodyParser(Protocol):
    def parse_body_elements(self, element: ET.Element) -> List[Any]:
        ...


FULL_SIZE = {"width": "100%", "height": "100%"}

# Output kind and seed attributes for every VML tag that becomes a node
SHAPE_TABLE: Dict[SourceShape, Tuple[ShapeKind, Dict[str, str]]] = {
    SourceShape.RECT: (ShapeKind.RECTANGLE, FULL_SIZE),
    SourceShape.OVAL: (ShapeKind.ELLIPSE, {"cx": "50%", "cy": "50%", "rx": "50%", "ry": "50%"}),
    SourceShape.LINE: (ShapeKind.LINE, {}),
    SourceShape.SHAPE: (ShapeKind.GROUP, {}),
    SourceShape.TEXTBOX: (ShapeKind.FOREIGN_OBJECT, FULL_SIZE),
}

_POSITION_AXES = (
    ("mso-position-horizontal-relative", "mso-position-horizontal", "left"),
    ("mso-position-vertical-relative", "mso-position-vertical", "top"),
)

PATH_COMMANDS = frozenset("mlxe,")
DIGITS = frozenset("0123456789")


def parse_vml_element(element: ET.Element, parser: Optional[BodyParser] = None) -> Optional[ShapeNode]:
    """Convert a VML element and its subtree into a ShapeNode.

    Args:
        element: VML element such as ``v:rect`` or ``v:shape``
        parser: Body parser for text box content; defaults to WordBodyParser

    Returns:
        The shape node, or None when the tag is not a supported shape
    """
    if not isinstance(element.tag, str):
        return None
    try:
        source = SourceShape(local_name(element.tag))
    except ValueError:
        return None

    if parser is None:
        from .body_parser import WordBodyParser
        parser = WordBodyParser()

    tag, seed = SHAPE_TABLE[source]
    attributes = dict(seed)
    style = None
    image_reference = None
    children: List[Any] = []

    for name, value in attrs(element):
        if name == "style":
            style = normalize_mso_position(parse_css_rules(value or ""))
        elif name == "fillcolor":
            attributes["fill"] = value
        elif name == "from":
            attributes["x1"], attributes["y1"] = parse_point(value)
        elif name == "to":
            attributes["x2"], attributes["y2"] = parse_point(value)

    for child in elements(element):
        child_name = local_name(child.tag)

        if child_name == StructuralChild.STROKE:
            attributes.update(parse_stroke(child))
        elif child_name == StructuralChild.FILL:
            attributes.update(parse_fill(child))
        elif child_name == StructuralChild.IMAGEDATA:
            tag = ShapeKind.IMAGE
            attributes.update(FULL_SIZE)
            image_reference = ImageReference(id=attr(child, "id"), title=attr(child, "title"))
        elif child_name == StructuralChild.TXBX_CONTENT:
            children.extend(parser.parse_body_elements(child))
        else:
            node = parse_vml_element(child, parser)
            if node is not None:
                children.append(node)

    return ShapeNode(
        tag=tag,
        attributes=attributes,
        style=style,
        image_reference=image_reference,
        children=children,
    )


def normalize_mso_position(style: Dict[str, str]) -> Dict[str, str]:
    """Rewrite page-relative ``mso-position-*`` pairs as absolute CSS positioning.

    Each axis is handled on its own; keys unrelated to positioning pass through.
    """
    result = dict(style)
    for relative_key, offset_key, css_key in _POSITION_AXES:
        if result.get(relative_key) != "page":
            continue
        result["position"] = "absolute"
        result[css_key] = result.get(offset_key) or "0"
        result.pop(relative_key, None)
        result.pop(offset_key, None)
    return result


def parse_point(value: str) -> Tuple[str, str]:
    """Split ``"x,y"`` into its raw components; missing parts become ``""``."""
    parts = (value or "").split(",") + ["", ""]
    return parts[0], parts[1]


def parse_stroke(element: ET.Element) -> Dict[str, str]:
    return {
        "stroke": attr(element, "color") or "",
        "stroke-width": length_attr(element, "weight", LengthUsage.EMU) or "1px",
    }


def parse_fill(element: ET.Element) -> Dict[str, str]:
    # Reserved: secondary colour (color2) is not mapped yet.
    return {}


def convert_path(path: str, converter: Optional[Callable[[str], Optional[str]]] = None) -> str:
    """Convert the coordinates of a VML path string into target lengths.

    Numbers (an optional sign followed by digits) go through ``converter``,
    command letters and commas are copied, anything else is dropped.

    Args:
        path: VML path such as ``"m0,0l100,200e"``
        converter: Maps a numeric token to its output text; defaults to
            ``convert_length`` with ``LengthUsage.VML_EMU``

    Returns:
        The converted path string
    """
    if converter is None:
        converter = lambda token: convert_length(token, LengthUsage.VML_EMU)

    out = []
    i = 0
    n = len(path)
    while i < n:
        ch = path[i]

        # Numbers are tested first so a sign is never mistaken for a separator
        start = i
        if ch in "+-":
            i += 1
        digits_start = i
        while i < n and path[i] in DIGITS:
            i += 1
        if i > digits_start:
            out.append(converter(path[start:i]) or "")
            continue
        i = start

        if ch in PATH_COMMANDS:
            out.append(ch)
        i += 1

    return "".join(out)
