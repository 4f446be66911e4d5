"""
Conversion of OOXML measurements into CSS/SVG length strings.
"""

import re
from enum import Enum
from typing import Optional


class LengthUsage(Enum):
    """Unit systems used by OOXML attributes: (multiplier, unit, min, max)."""
    DXA = (0.05, "pt", None, None)
    EMU = (1 / 12700, "pt", None, None)
    FONT_SIZE = (0.5, "pt", None, None)
    BORDER = (0.125, "pt", 0.25, 12)
    POINT = (1, "pt", None, None)
    PERCENT = (0.02, "%", None, None)
    LINE_HEIGHT = (1 / 240, "", None, None)
    VML_EMU = (1 / 12700, "", None, None)

    def __init__(self, mul, unit, min_value, max_value):
        self.mul = mul
        self.unit = unit
        self.min_value = min_value
        self.max_value = max_value


# Values that already carry a CSS unit are passed through untouched
_HAS_UNIT = re.compile(r".+(p[xt]|%)$")
_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")


def convert_length(value: Optional[str], usage: LengthUsage = LengthUsage.DXA) -> Optional[str]:
    """Convert a raw OOXML measurement into a length string.

    Args:
        value: Raw attribute value, e.g. ``"12700"`` or ``"1.5pt"``
        usage: Unit system the raw value is expressed in

    Returns:
        Formatted length such as ``"1.00pt"``, the input itself when it already
        has a unit, or None when the value is missing or not numeric
    """
    if value is None:
        return None
    if _HAS_UNIT.match(value):
        return value

    match = _LEADING_INT.match(value)
    if not match:
        return None

    num = int(match.group(1)) * usage.mul
    if usage.min_value is not None and usage.max_value is not None:
        num = min(max(num, usage.min_value), usage.max_value)
    return f"{num:.2f}{usage.unit}"
