"""
Render shape trees as standalone SVG documents.
"""

import xml.etree.ElementTree as ET
from typing import Any, Callable, Optional

from .body_parser import Paragraph
from .css import format_css_rules
from .shape_node import ShapeKind, ShapeNode


SVG_NS = "http://www.w3.org/2000/svg"
XHTML_NS = "http://www.w3.org/1999/xhtml"
ET.register_namespace("", SVG_NS)
ET.register_namespace("html", XHTML_NS)


def _svg(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _html(tag: str) -> str:
    return f"{{{XHTML_NS}}}{tag}"


class SvgRenderer:
    """Turn a ShapeNode into an ``<svg>`` element tree."""

    def __init__(
        self,
        image_resolver: Optional[Callable[[str], Optional[str]]] = None,
        pretty_print: bool = True,
    ):
        """Initialize the renderer.

        Args:
            image_resolver: Maps an image relationship id to an href (data URI
                or path); images stay without href when it returns None
            pretty_print: Indent the serialized output
        """
        self.image_resolver = image_resolver
        self.pretty_print = pretty_print

    def render(self, node: ShapeNode) -> ET.Element:
        """Render the root drawing inside an ``<svg>`` container.

        The container carries the drawing's inline style; explicit width and
        height in the style are also copied to the container's size.
        """
        container = ET.Element(_svg("svg"))
        style = node.style or {}
        if style:
            container.set("style", format_css_rules(style))
        for key in ("width", "height"):
            if style.get(key):
                container.set(key, style[key])

        container.append(self._render_shape(node, is_root=True))
        return container

    def to_string(self, node: ShapeNode) -> str:
        svg = self.render(node)
        if self.pretty_print:
            ET.indent(svg)
        return ET.tostring(svg, encoding="unicode")

    def _render_shape(self, node: ShapeNode, is_root: bool = False) -> ET.Element:
        element = ET.Element(_svg(node.tag.value))
        for name, value in node.attributes.items():
            if value is not None:
                element.set(name, value)
        if node.style and not is_root:
            element.set("style", format_css_rules(node.style))

        if node.tag == ShapeKind.IMAGE and node.image_reference and node.image_reference.id:
            href = self.image_resolver(node.image_reference.id) if self.image_resolver else None
            if href:
                element.set("href", href)

        for child in node.children:
            self._render_child(element, child, inside_html=node.tag == ShapeKind.FOREIGN_OBJECT)
        return element

    def _render_child(self, parent: ET.Element, child: Any, inside_html: bool) -> None:
        if isinstance(child, ShapeNode):
            parent.append(self._render_shape(child))
        elif isinstance(child, Paragraph):
            parent.append(self._render_paragraph(child))
        else:
            text_el = ET.SubElement(parent, _html("span") if inside_html else _svg("text"))
            text_el.text = str(child)

    def _render_paragraph(self, paragraph: Paragraph) -> ET.Element:
        p = ET.Element(_html("p"))
        if paragraph.style_id:
            p.set("class", paragraph.style_id)
        p.text = paragraph.text
        for drawing in paragraph.drawings:
            p.append(self.render(drawing))
        return p
