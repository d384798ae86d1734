"""Mind-map outline editor: tree store, path addressing and diagram layout."""

from mindmap_outline.core.layout.engine import compute_layout
from mindmap_outline.core.tree.store import (
    add_child,
    add_sibling,
    create_tree,
    delete_node,
    indent,
    outdent,
    toggle_collapse,
    update_content,
)
from mindmap_outline.models.node import Layout, Node, PositionedNode, SiblingResult
from mindmap_outline.session import MindMapSession

__all__ = [
    "Layout",
    "MindMapSession",
    "Node",
    "PositionedNode",
    "SiblingResult",
    "add_child",
    "add_sibling",
    "compute_layout",
    "create_tree",
    "delete_node",
    "indent",
    "outdent",
    "toggle_collapse",
    "update_content",
]
