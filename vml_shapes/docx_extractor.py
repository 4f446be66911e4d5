"""
Extract VML drawings from a Word (.docx) package.
"""

import base64
import json
import mimetypes
import posixpath
import re
import zipfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .body_parser import WordBodyParser
from .config import VmlShapesConfig
from .shape_node import ShapeNode, SourceShape
from .svg_renderer import SvgRenderer
from .vml import parse_vml_element
from .xml_utils import NS, elements, local_name


MAIN_PART = "word/document.xml"
_HEADER_FOOTER_PART = re.compile(r"^word/(header|footer)\d*\.xml$")


def _exceeds_depth(element: ET.Element, limit: int) -> bool:
    """Check whether shapes nest more than ``limit`` levels deep.

    Only shape elements count; text box body markup between them does not.
    """
    shape_tags = {shape.value for shape in SourceShape}
    stack = [(element, 0)]
    while stack:
        node, depth = stack.pop()
        if local_name(node.tag) in shape_tags:
            depth += 1
            if depth > limit:
                return True
        stack.extend((child, depth) for child in elements(node))
    return False


def _top_level_picts(element: ET.Element) -> Iterator[ET.Element]:
    """Yield ``w:pict`` elements that are not nested inside another one."""
    pict_tag = f"{{{NS['w']}}}pict"
    stack = [element]
    while stack:
        node = stack.pop()
        if node.tag == pict_tag:
            yield node
            continue
        stack.extend(reversed(list(elements(node))))


class DocxVmlExtractor:
    """Find VML drawings in a .docx file and convert them to shape trees."""

    def __init__(self, docx_path: str, config: Optional[VmlShapesConfig] = None):
        """Initialize the extractor with a Word file path.

        Args:
            docx_path: Path to the .docx file
            config: Pipeline settings (defaults when None)
        """
        self.docx_path = Path(docx_path)
        self.config = config or VmlShapesConfig()
        self.body_parser = WordBodyParser()

        with zipfile.ZipFile(self.docx_path, 'r') as z:
            self._names = z.namelist()
        if MAIN_PART not in self._names:
            raise ValueError(f"{self.docx_path} is not a Word document: {MAIN_PART} is missing")

    def part_names(self) -> List[str]:
        """Return the parts to scan, main document first."""
        parts = [MAIN_PART]
        if self.config.include_headers_footers:
            parts.extend(sorted(n for n in self._names if _HEADER_FOOTER_PART.match(n)))
        return parts

    def iter_drawings(self) -> Iterator[Tuple[str, ShapeNode]]:
        """Yield ``(part_name, node)`` for every VML drawing in document order."""
        with zipfile.ZipFile(self.docx_path, 'r') as z:
            for part in self.part_names():
                try:
                    root = ET.fromstring(z.read(part))
                except ET.ParseError as e:
                    print(f"Warning: Could not parse {part}: {e}")
                    continue

                for pict in _top_level_picts(root):
                    for child in elements(pict):
                        if _exceeds_depth(child, self.config.max_depth):
                            print(f"Warning: Skipping drawing in {part}: shapes nest deeper than {self.config.max_depth} levels")
                            continue
                        node = parse_vml_element(child, self.body_parser)
                        if node is not None:
                            yield part, node

    def extract(self) -> Dict[str, Any]:
        """Extract all drawings grouped by package part.

        Returns:
            Dictionary containing the filename and per-part drawings
        """
        drawings_by_part: Dict[str, List[Dict[str, Any]]] = {}
        for part, node in self.iter_drawings():
            drawings_by_part.setdefault(part, []).append(node.to_dict())

        return {
            "filename": self.docx_path.name,
            "parts": [
                {"part": part, "drawings": drawings}
                for part, drawings in drawings_by_part.items()
            ],
        }

    def save_to_json(self, output_path: str) -> None:
        """Extract and save drawing data to a JSON file.

        Args:
            output_path: Path to save the JSON file
        """
        data = self.extract()
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def load_relationships(self, part: str) -> Dict[str, str]:
        """Map relationship ids of a part to package paths of their targets."""
        directory, filename = posixpath.split(part)
        rels_name = posixpath.join(directory, "_rels", f"{filename}.rels")
        rels: Dict[str, str] = {}

        with zipfile.ZipFile(self.docx_path, 'r') as z:
            if rels_name not in self._names:
                return rels
            try:
                root = ET.fromstring(z.read(rels_name))
            except ET.ParseError as e:
                print(f"Warning: Could not parse {rels_name}: {e}")
                return rels

        for rel in root.findall("rel:Relationship", NS):
            rel_id = rel.get("Id")
            target = rel.get("Target")
            if not rel_id or not target or rel.get("TargetMode") == "External":
                continue
            if target.startswith("/"):
                # Absolute targets are relative to the package root
                rels[rel_id] = posixpath.normpath(target.lstrip("/"))
            else:
                rels[rel_id] = posixpath.normpath(posixpath.join(directory, target))
        return rels

    def image_resolver(self, part: str) -> Callable[[str], Optional[str]]:
        """Build a resolver turning image relationship ids of ``part`` into hrefs."""
        rels = self.load_relationships(part)
        embed = self.config.embed_images

        def resolve(rel_id: str) -> Optional[str]:
            target = rels.get(rel_id)
            if target is None or target not in self._names:
                return None
            if not embed:
                return target
            with zipfile.ZipFile(self.docx_path, 'r') as z:
                data = z.read(target)
            mime = mimetypes.guess_type(target)[0] or "application/octet-stream"
            return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"

        return resolve

    def render_svgs(self, output_dir: str) -> List[Path]:
        """Render every drawing to its own SVG file.

        Args:
            output_dir: Directory to write ``<part>-<n>.svg`` files into

        Returns:
            Paths of the written files
        """
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        renderers: Dict[str, SvgRenderer] = {}
        counters: Dict[str, int] = {}
        written = []

        for part, node in self.iter_drawings():
            if part not in renderers:
                renderers[part] = SvgRenderer(
                    image_resolver=self.image_resolver(part),
                    pretty_print=self.config.pretty_print,
                )
            counters[part] = counters.get(part, 0) + 1

            stem = Path(part).stem
            path = out_dir / f"{stem}-{counters[part]}.svg"
            path.write_text(renderers[part].to_string(node), encoding="utf-8")
            written.append(path)

        return written
