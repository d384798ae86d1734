"""Tests for layout configuration."""

from mindmap_outline.config import (
    H_SPACING,
    NODE_HEIGHT,
    NODE_WIDTH,
    V_SPACING,
    LayoutSettings,
    resolve_layout_settings,
)


def test_defaults_without_environment() -> None:
    settings = resolve_layout_settings({})
    assert settings == LayoutSettings()
    assert (settings.node_width, settings.node_height) == (NODE_WIDTH, NODE_HEIGHT)
    assert (settings.h_spacing, settings.v_spacing) == (H_SPACING, V_SPACING)
    assert (settings.origin_x, settings.origin_y) == (0, 0)


def test_environment_overrides() -> None:
    settings = resolve_layout_settings({"MINDMAP_NODE_HEIGHT": "30", "MINDMAP_V_SPACING": "4.5"})
    assert settings.node_height == 30
    assert settings.v_spacing == 4.5
    assert settings.node_width == NODE_WIDTH


def test_non_numeric_override_is_ignored() -> None:
    settings = resolve_layout_settings({"MINDMAP_NODE_WIDTH": "wide", "MINDMAP_H_SPACING": " "})
    assert settings.node_width == NODE_WIDTH
    assert settings.h_spacing == H_SPACING
