"""Structural edits on mind-map snapshots.

Every function takes the current root and returns a new root without touching
the input. Unchanged subtrees are shared between the old and new snapshot.
An edit whose target does not exist, or which makes no sense for the target
(deleting the root, indenting a first child, outdenting a top-level node),
returns the input tree unchanged instead of raising.
"""

import uuid
from collections.abc import Iterator
from dataclasses import replace

from mindmap_outline.config import PLACEHOLDER_CONTENT, ROOT_CONTENT, ROOT_ID
from mindmap_outline.core.tree.paths import is_valid_path, parent_path, update_node_at_path
from mindmap_outline.models.node import Keep, Node, NodePath, Remove, SiblingResult
from mindmap_outline.protocols import IdFactory

# Draws from the id factory before giving up on finding an unused id.
_MAX_ID_ATTEMPTS = 100


def default_id_factory() -> str:
    """Return a random 128-bit hex id."""
    return uuid.uuid4().hex


class SequentialIdFactory:
    """Deterministic ids ``n1``, ``n2``, ... for scripted sessions."""

    def __init__(self, prefix: str = "n") -> None:
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}{self.count}"


def create_tree(*, root_id: str = ROOT_ID, content: str = ROOT_CONTENT) -> Node:
    """Create the initial single-node tree."""
    return Node(id=root_id, content=content)


# --- Lookup ---


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node in pre-order, collapsed or not."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_ids(root: Node) -> set[str]:
    return {n.id for n in iter_nodes(root)}


def count_nodes(root: Node) -> int:
    return sum(1 for _ in iter_nodes(root))


def find_path(root: Node, node_id: str) -> NodePath | None:
    """Return the current path of ``node_id``, or None if it is not in the tree."""
    stack: list[tuple[Node, NodePath]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if node.id == node_id:
            return path
        for i in range(len(node.children) - 1, -1, -1):
            stack.append((node.children[i], (*path, i)))
    return None


def find_node(root: Node, node_id: str) -> Node | None:
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def _fresh_id(root: Node, new_id: str | None, id_factory: IdFactory | None) -> str | None:
    """Pick an id that no node in ``root`` uses.

    An explicit ``new_id`` is taken as-is unless it is already in use. Ids drawn
    from the factory are redrawn while they collide, up to a fixed number of
    attempts. None means no free id was found and the caller treats the edit
    as a no-op.
    """
    existing = node_ids(root)
    if new_id is not None:
        return None if new_id in existing else new_id

    factory = id_factory or default_id_factory
    for _ in range(_MAX_ID_ATTEMPTS):
        candidate = factory()
        if candidate not in existing:
            return candidate
    return None


# --- Edits addressed by id ---


def add_child(
    root: Node,
    parent_id: str,
    *,
    new_id: str | None = None,
    id_factory: IdFactory | None = None,
    content: str = PLACEHOLDER_CONTENT,
) -> Node:
    """Append a new placeholder node to the children of ``parent_id``."""
    path = find_path(root, parent_id)
    if path is None:
        return root
    child_id = _fresh_id(root, new_id, id_factory)
    if child_id is None:
        return root

    child = Node(id=child_id, content=content)
    new_root = update_node_at_path(
        root, path, lambda node: Keep(replace(node, children=(*node.children, child)))
    )
    return new_root or root


def delete_node(root: Node, node_id: str) -> Node:
    """Remove ``node_id`` together with its whole subtree.

    The root cannot be deleted; asking for it returns the tree unchanged.
    """
    if node_id == root.id:
        return root
    path = find_path(root, node_id)
    if path is None:
        return root
    return update_node_at_path(root, path, lambda _node: Remove()) or root


def update_content(root: Node, node_id: str, text: str) -> Node:
    path = find_path(root, node_id)
    if path is None:
        return root
    return update_node_at_path(root, path, lambda node: Keep(replace(node, content=text))) or root


def toggle_collapse(root: Node, node_id: str) -> Node:
    """Flip the collapsed flag of ``node_id``. Leaves have nothing to collapse."""
    path = find_path(root, node_id)
    if path is None:
        return root

    def flip(node: Node) -> Keep:
        if not node.children:
            return Keep(node)
        return Keep(replace(node, collapsed=not node.collapsed))

    return update_node_at_path(root, path, flip) or root


# --- Edits addressed by path ---


def add_sibling(
    root: Node,
    path: NodePath,
    *,
    new_id: str | None = None,
    id_factory: IdFactory | None = None,
) -> SiblingResult:
    """Insert an empty node right after the node at ``path``.

    Returns the new tree and the id of the inserted node, which the outline
    view should focus. The root has no siblings, so ``path=()`` is a no-op.
    """
    if not path or not is_valid_path(root, path):
        return SiblingResult(tree=root)
    sibling_id = _fresh_id(root, new_id, id_factory)
    if sibling_id is None:
        return SiblingResult(tree=root)

    index = path[-1]
    sibling = Node(id=sibling_id, content="")

    def insert_after(parent: Node) -> Keep:
        children = parent.children
        return Keep(
            replace(parent, children=(*children[: index + 1], sibling, *children[index + 1 :]))
        )

    new_root = update_node_at_path(root, parent_path(path), insert_after)
    return SiblingResult(tree=new_root or root, new_id=sibling_id)


def indent(root: Node, path: NodePath) -> Node:
    """Make the node at ``path`` the last child of its preceding sibling."""
    if not path or path[-1] == 0 or not is_valid_path(root, path):
        return root

    index = path[-1]

    def move_into_previous(parent: Node) -> Keep:
        children = parent.children
        target = children[index]
        previous = children[index - 1]
        previous = replace(previous, children=(*previous.children, target))
        return Keep(
            replace(parent, children=(*children[: index - 1], previous, *children[index + 1 :]))
        )

    return update_node_at_path(root, parent_path(path), move_into_previous) or root


def outdent(root: Node, path: NodePath) -> Node:
    """Promote the node at ``path`` to a sibling placed right after its parent.

    Siblings that followed the node under its old parent become trailing
    children of the promoted node, after its own children and in their
    original order.
    """
    if len(path) < 2 or not is_valid_path(root, path):
        return root

    parent_index, index = path[-2], path[-1]

    def promote(grandparent: Node) -> Keep:
        children = grandparent.children
        parent = children[parent_index]
        target = parent.children[index]
        following = parent.children[index + 1 :]

        parent = replace(parent, children=parent.children[:index])
        target = replace(target, children=(*target.children, *following))
        return Keep(
            replace(
                grandparent,
                children=(*children[:parent_index], parent, target, *children[parent_index + 1 :]),
            )
        )

    return update_node_at_path(root, path[:-2], promote) or root
