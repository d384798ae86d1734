"""Path addressing: resolve and rewrite nodes by root-relative child indices."""

from collections.abc import Callable
from dataclasses import replace

from mindmap_outline.models.node import Keep, Node, NodePath, Remove, Rewrite

Updater = Callable[[Node], Rewrite]


class PathSyntaxError(ValueError):
    """A textual path could not be parsed."""


def parent_path(path: NodePath) -> NodePath:
    """Path of the parent of the node at ``path`` (the root has no parent)."""
    return path[:-1]


def node_at_path(root: Node, path: NodePath) -> Node | None:
    """Return the node at ``path``, or None if any index is out of range."""
    node = root
    for index in path:
        if index < 0 or index >= len(node.children):
            return None
        node = node.children[index]
    return node


def is_valid_path(root: Node, path: NodePath) -> bool:
    return node_at_path(root, path) is not None


def update_node_at_path(root: Node, path: NodePath, updater: Updater) -> Node | None:
    """Rewrite the subtree at ``path`` and rebuild the ancestors above it.

    The updater receives the target node and returns ``Keep(node)`` to put a
    replacement in its slot or ``Remove()`` to drop the slot from the parent.
    Nodes off the edited path are shared with the input tree, and a path with
    an out-of-range index leaves the tree unchanged.

    Returns:
        The new root, or None if the updater removed the root itself.
    """
    # Collect the ancestors along the path, then rebuild them bottom-up.
    ancestors: list[Node] = []
    node = root
    for index in path:
        if index < 0 or index >= len(node.children):
            return root
        ancestors.append(node)
        node = node.children[index]

    result: Rewrite = updater(node)
    for parent, index in zip(reversed(ancestors), reversed(path), strict=True):
        if isinstance(result, Remove):
            children = parent.children[:index] + parent.children[index + 1 :]
        elif result.node is parent.children[index]:
            return root
        else:
            children = parent.children[:index] + (result.node,) + parent.children[index + 1 :]
        result = Keep(replace(parent, children=children))

    if isinstance(result, Remove):
        return None
    return result.node


def parse_path(text: str) -> NodePath:
    """Parse a dotted path such as ``"0.2.1"``.

    An empty string or ``"."`` is the root path. Whitespace and a leading
    slash are tolerated, so ``"/0/2"`` is accepted as well.
    """
    cleaned = text.strip().strip("/").replace("/", ".")
    if cleaned in ("", "."):
        return ()

    parts = cleaned.split(".")
    try:
        indices = tuple(int(p) for p in parts)
    except ValueError:
        msg = f"Invalid path {text!r}: expected dot-separated child indices"
        raise PathSyntaxError(msg) from None
    if any(i < 0 for i in indices):
        msg = f"Invalid path {text!r}: indices must not be negative"
        raise PathSyntaxError(msg)
    return indices


def format_path(path: NodePath) -> str:
    return ".".join(str(i) for i in path) if path else "."
