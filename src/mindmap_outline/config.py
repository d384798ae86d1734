"""Configuration constants for mindmap-outline."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from loguru import logger

# Id and content of the root created by create_tree().
ROOT_ID: str = "root"
ROOT_CONTENT: str = "Root"

# Content given to nodes created by add_child(). Siblings start out empty.
PLACEHOLDER_CONTENT: str = "New Node"

# Diagram geometry, in canvas units.
NODE_WIDTH: float = 160
NODE_HEIGHT: float = 56
H_SPACING: float = 220
V_SPACING: float = 36

# Environment overrides for the layout geometry.
LAYOUT_ENV_VARS: dict[str, str] = {
    "node_width": "MINDMAP_NODE_WIDTH",
    "node_height": "MINDMAP_NODE_HEIGHT",
    "h_spacing": "MINDMAP_H_SPACING",
    "v_spacing": "MINDMAP_V_SPACING",
}


@dataclass(frozen=True)
class LayoutSettings:
    """Geometry used by the layout engine."""

    origin_x: float = 0
    origin_y: float = 0
    node_width: float = NODE_WIDTH
    node_height: float = NODE_HEIGHT
    h_spacing: float = H_SPACING
    v_spacing: float = V_SPACING


def resolve_layout_settings(env: Mapping[str, str] | None = None) -> LayoutSettings:
    """Build layout settings from the environment, falling back to defaults."""
    if env is None:
        env = os.environ

    overrides: dict[str, float] = {}
    for field_name, var in LAYOUT_ENV_VARS.items():
        raw = env.get(var)
        if raw is None or not raw.strip():
            continue
        try:
            overrides[field_name] = float(raw)
        except ValueError:
            logger.warning("Ignoring non-numeric {}={!r}", var, raw)

    return LayoutSettings(**overrides)
