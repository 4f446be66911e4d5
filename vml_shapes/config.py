"""
Configuration for the VML extraction and rendering pipeline.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError


CONFIG_ENV_VAR = "VML_SHAPES_CONFIG"


class VmlShapesConfig(BaseModel):
    """Settings that control how documents are walked and drawings written."""
    # Shape elements allowed to nest inside one drawing
    max_depth: int = Field(default=64, ge=1)
    include_headers_footers: bool = True
    embed_images: bool = True
    pretty_print: bool = True


def load_config(path: Optional[str] = None) -> VmlShapesConfig:
    """Load settings from a YAML file.

    Args:
        path: YAML file path (if None, reads VML_SHAPES_CONFIG env var)

    Returns:
        Validated configuration; defaults when no file is configured
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return VmlShapesConfig()

    try:
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to read config file {path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    try:
        return VmlShapesConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}")
