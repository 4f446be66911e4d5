"""
Parse and format inline CSS declaration blocks.
"""

from typing import Dict


def parse_css_rules(text: str) -> Dict[str, str]:
    """Split ``"a: 1; b: 2"`` into ``{"a": "1", "b": "2"}``.

    Declarations without a colon or with an empty name are skipped; the last
    occurrence of a repeated property wins.
    """
    result: Dict[str, str] = {}
    for declaration in (text or "").split(";"):
        name, sep, value = declaration.partition(":")
        name = name.strip()
        if not sep or not name:
            continue
        result[name] = value.strip()
    return result


def format_css_rules(style: Dict[str, str]) -> str:
    return ";".join(f"{name}: {value}" for name, value in (style or {}).items())
