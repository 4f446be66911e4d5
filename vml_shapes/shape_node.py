"""
Renderer-agnostic shape tree produced from VML markup.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ShapeKind(str, Enum):
    """Output element kinds. Values are the SVG element names they render as."""
    RECTANGLE = "rect"
    ELLIPSE = "ellipse"
    LINE = "line"
    GROUP = "g"
    FOREIGN_OBJECT = "foreignObject"
    IMAGE = "image"


class SourceShape(str, Enum):
    """VML tags that start a shape node."""
    RECT = "rect"
    OVAL = "oval"
    LINE = "line"
    SHAPE = "shape"
    TEXTBOX = "textbox"


class StructuralChild(str, Enum):
    """VML child tags that decorate their parent instead of becoming nodes."""
    STROKE = "stroke"
    FILL = "fill"
    IMAGEDATA = "imagedata"
    TXBX_CONTENT = "txbxContent"


@dataclass
class ImageReference:
    """Relationship id and title of an image stored elsewhere in the package."""
    id: Optional[str]
    title: Optional[str]


@dataclass
class ShapeNode:
    tag: ShapeKind
    attributes: Dict[str, str] = field(default_factory=dict)
    style: Optional[Dict[str, str]] = None
    wrap_type: Optional[str] = None
    image_reference: Optional[ImageReference] = None
    children: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node and its subtree to plain JSON-compatible data."""
        data: Dict[str, Any] = {
            "tag": self.tag.value,
            "attributes": dict(self.attributes),
        }
        if self.style is not None:
            data["style"] = dict(self.style)
        if self.wrap_type is not None:
            data["wrap_type"] = self.wrap_type
        if self.image_reference is not None:
            data["image_reference"] = {
                "id": self.image_reference.id,
                "title": self.image_reference.title,
            }
        data["children"] = [_child_to_dict(child) for child in self.children]
        return data


def _child_to_dict(child: Any) -> Any:
    if hasattr(child, "to_dict"):
        return child.to_dict()
    return str(child)
