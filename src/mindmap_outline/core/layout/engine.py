"""Diagram layout: place every visible node box on a 2-D canvas.

Depth decides x; y is decided by the node's position among its rendered
siblings and the heights of the subtrees laid out before it. A parent is
centered vertically against the span of its children. Children of a
collapsed node are not laid out at all.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from mindmap_outline.config import H_SPACING, NODE_HEIGHT, NODE_WIDTH, V_SPACING, LayoutSettings
from mindmap_outline.core.tree.store import count_nodes
from mindmap_outline.models.node import Connector, Layout, Node, PositionedNode


@dataclass
class _Frame:
    """A node whose children are still being laid out."""

    node: Node
    depth: int
    y_offset: float
    next_child: int = 0
    child_offset: float = 0.0
    subtree_height: float = 0.0
    placed: list[PositionedNode] = field(default_factory=list)


def compute_layout(
    root: Node,
    origin_x: float = 0,
    origin_y: float = 0,
    node_width: float = NODE_WIDTH,
    node_height: float = NODE_HEIGHT,
    h_spacing: float = H_SPACING,
    v_spacing: float = V_SPACING,
) -> Layout:
    """Lay out ``root`` and its visible descendants.

    Args:
        root: Tree snapshot to lay out.
        origin_x: x of the root box.
        origin_y: Top of the diagram; the first leaf is placed here.
        node_width: Width of every box.
        node_height: Height of every box.
        h_spacing: Horizontal distance between the x of consecutive depths.
        v_spacing: Vertical gap between sibling subtrees.

    Returns:
        The positioned tree and the total height of the diagram.
    """
    # Post-order: a frame is finished once every child has been placed.
    stack = [_Frame(root, 0, origin_y, child_offset=origin_y)]
    while True:
        frame = stack[-1]
        node = frame.node
        x = origin_x + frame.depth * h_spacing

        if node.collapsed or not node.children:
            hidden = count_nodes(node) - 1 if node.collapsed else 0
            box = PositionedNode(
                id=node.id,
                content=node.content,
                x=x,
                y=frame.y_offset,
                width=node_width,
                height=node_height,
                depth=frame.depth,
                collapsed=node.collapsed,
                hidden_count=hidden,
            )
            height = node_height
        elif frame.next_child < len(node.children):
            child = node.children[frame.next_child]
            frame.next_child += 1
            offset = frame.child_offset
            stack.append(_Frame(child, frame.depth + 1, offset, child_offset=offset))
            continue
        else:
            box = PositionedNode(
                id=node.id,
                content=node.content,
                x=x,
                y=frame.y_offset + (frame.subtree_height - node_height) / 2,
                width=node_width,
                height=node_height,
                depth=frame.depth,
                children=tuple(frame.placed),
            )
            height = frame.subtree_height

        stack.pop()
        if not stack:
            return Layout(root=box, total_height=height)
        parent = stack[-1]
        if parent.placed:
            parent.subtree_height += v_spacing
        parent.placed.append(box)
        parent.subtree_height += height
        parent.child_offset += height + v_spacing


def layout_with_settings(root: Node, settings: LayoutSettings) -> Layout:
    return compute_layout(
        root,
        origin_x=settings.origin_x,
        origin_y=settings.origin_y,
        node_width=settings.node_width,
        node_height=settings.node_height,
        h_spacing=settings.h_spacing,
        v_spacing=settings.v_spacing,
    )


def iter_boxes(box: PositionedNode) -> Iterator[PositionedNode]:
    """Yield every positioned box in pre-order."""
    stack = [box]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def iter_connectors(box: PositionedNode) -> Iterator[Connector]:
    """Yield a connector from each parent's right edge to each child's left edge.

    Both ends sit at the vertical midpoint of their box.
    """
    for parent in iter_boxes(box):
        for child in parent.children:
            yield Connector(
                parent_id=parent.id,
                child_id=child.id,
                x1=parent.x + parent.width,
                y1=parent.y + parent.height / 2,
                x2=child.x,
                y2=child.y + child.height / 2,
            )


def _box_entry(box: PositionedNode) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": box.id,
        "content": box.content,
        "x": box.x,
        "y": box.y,
        "width": box.width,
        "height": box.height,
        "depth": box.depth,
    }
    if box.collapsed:
        entry["collapsed"] = True
        entry["hidden_count"] = box.hidden_count
    return entry


def layout_to_dict(layout: Layout, *, include_connectors: bool = False) -> dict[str, Any]:
    """Convert a layout into plain dicts and lists ready for JSON output."""
    root_entry = _box_entry(layout.root)
    todo = [(layout.root, root_entry)]
    while todo:
        box, entry = todo.pop()
        if not box.children:
            continue
        entry["children"] = []
        for child in box.children:
            child_entry = _box_entry(child)
            entry["children"].append(child_entry)
            todo.append((child, child_entry))

    output: dict[str, Any] = {
        "root": root_entry,
        "total_height": layout.total_height,
    }
    if include_connectors:
        output["connectors"] = [
            {
                "from": c.parent_id,
                "to": c.child_id,
                "x1": c.x1,
                "y1": c.y1,
                "x2": c.x2,
                "y2": c.y2,
            }
            for c in iter_connectors(layout.root)
        ]
    return output
