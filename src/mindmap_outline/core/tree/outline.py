"""Textual outline view: visible rows and markdown rendering."""

import io

from mindmap_outline.core.tree.store import count_nodes
from mindmap_outline.models.node import Node, NodePath, OutlineRow


def outline_rows(root: Node) -> list[OutlineRow]:
    """Return the rows of the text view in display order.

    The text view lists the root's descendants, not the root itself. Children
    of a collapsed node are skipped. Each row carries the node's current path
    so indent/outdent/add-sibling gestures can be routed back to the store.
    """
    rows: list[OutlineRow] = []
    todo: list[tuple[Node, NodePath]] = [
        (child, (i,)) for i, child in reversed(list(enumerate(root.children)))
    ]
    while todo:
        node, path = todo.pop()
        rows.append(
            OutlineRow(
                id=node.id,
                path=path,
                depth=len(path),
                content=node.content,
                has_children=node.has_children,
                collapsed=node.collapsed,
            )
        )
        if not node.collapsed:
            numbered = list(enumerate(node.children))
            todo.extend((child, (*path, i)) for i, child in reversed(numbered))
    return rows


def render_outline_as_markdown(
    root: Node,
    *,
    max_depth: int | None = None,
    include_root: bool = True,
) -> str:
    """Render the tree as an indented markdown bullet list.

    Args:
        root: Tree snapshot to render.
        max_depth: Max levels below the root to include (None = unlimited).
        include_root: Whether the root itself is written as the first bullet.

    Returns:
        Markdown string with bullet-list hierarchy. Expanded parents are
        marked with a down triangle, collapsed ones with a right triangle
        followed by a count of hidden nodes.
    """
    out = io.StringIO()

    todo: list[tuple[Node, int]]
    if include_root:
        todo = [(root, 0)]
    elif max_depth is None or max_depth > 0:
        todo = [(child, 0) for child in reversed(root.children)]
    else:
        todo = []

    while todo:
        node, depth = todo.pop()
        indent = "    " * depth

        prefix = "- "
        if node.children:
            prefix = "- ▶ " if node.collapsed else "- ▼ "

        lines = node.content.split("\n")
        out.write(f"{indent}{prefix}{lines[0]}\n")
        for line in lines[1:]:
            out.write(f"{indent}  {line}\n")

        if not node.children:
            continue

        child_indent = "    " * (depth + 1)
        if node.collapsed:
            hidden = count_nodes(node) - 1
            out.write(f"{child_indent}- ... ({hidden} hidden)\n")
            continue

        level = depth if include_root else depth + 1
        if max_depth is not None and level >= max_depth:
            count = len(node.children)
            noun = "child" if count == 1 else "children"
            out.write(f"{child_indent}- ... ({count} more {noun}, id={node.id})\n")
            continue

        todo.extend((child, depth + 1) for child in reversed(node.children))

    return out.getvalue()
