"""
Minimal WordprocessingML body parser for text box content.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .xml_utils import attr, elements, local_name


@dataclass
class Paragraph:
    """Plain-text rendition of a ``w:p`` element."""
    text: str
    style_id: Optional[str] = None
    drawings: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "paragraph",
            "text": self.text,
            "style_id": self.style_id,
            "drawings": [d.to_dict() for d in self.drawings],
        }


class WordBodyParser:
    """Turn the children of a ``w:txbxContent`` into Paragraph nodes.

    Only paragraphs are kept; tables and other block content are skipped.
    VML drawings anchored inside a paragraph are built into ``drawings``.
    """

    def parse_body_elements(self, element: ET.Element) -> List[Paragraph]:
        paragraphs = []
        for child in elements(element):
            if local_name(child.tag) == "p":
                paragraphs.append(self._parse_paragraph(child))
        return paragraphs

    def _parse_paragraph(self, p: ET.Element) -> Paragraph:
        text_parts: List[str] = []
        drawings: List[Any] = []
        style_id = None

        for child in elements(p):
            if local_name(child.tag) == "pPr":
                for prop in elements(child):
                    if local_name(prop.tag) == "pStyle":
                        style_id = attr(prop, "val")
            else:
                self._collect_inline(child, text_parts, drawings)

        return Paragraph(text="".join(text_parts), style_id=style_id, drawings=drawings)

    def _collect_inline(self, node: ET.Element, text_parts: List[str], drawings: List[Any]) -> None:
        name = local_name(node.tag)
        if name == "r":
            for item in elements(node):
                item_name = local_name(item.tag)
                if item_name == "t":
                    text_parts.append(item.text or "")
                elif item_name == "tab":
                    text_parts.append("\t")
                elif item_name in ("br", "cr"):
                    text_parts.append("\n")
                elif item_name == "pict":
                    drawings.extend(self._parse_pict(item))
                elif item_name == "AlternateContent":
                    drawings.extend(self._parse_alternate_content(item))
        elif name in ("hyperlink", "ins", "smartTag", "fldSimple", "sdt", "sdtContent"):
            # Wrappers whose runs still belong to the paragraph text
            for child in elements(node):
                self._collect_inline(child, text_parts, drawings)

    def _parse_alternate_content(self, element: ET.Element) -> List[Any]:
        # Only the Fallback branch carries VML; Choice holds the DrawingML twin
        drawings = []
        for branch in elements(element):
            if local_name(branch.tag) != "Fallback":
                continue
            for item in elements(branch):
                if local_name(item.tag) == "pict":
                    drawings.extend(self._parse_pict(item))
        return drawings

    def _parse_pict(self, pict: ET.Element) -> List[Any]:
        from .vml import parse_vml_element

        drawings = []
        for child in elements(pict):
            node = parse_vml_element(child, self)
            if node is not None:
                drawings.append(node)
        return drawings
