"""Domain models for the mind-map outline editor."""

from dataclasses import dataclass

# A root-relative sequence of zero-based child indices. The root's path is ().
NodePath = tuple[int, ...]


@dataclass(frozen=True)
class Node:
    """A single node in a mind-map tree.

    Nodes are immutable snapshots: every edit builds new nodes along the
    edited path and shares the untouched subtrees.
    """

    id: str
    content: str
    children: tuple["Node", ...] = ()
    collapsed: bool = False

    @property
    def has_children(self) -> bool:
        return bool(self.children)


@dataclass(frozen=True)
class Keep:
    """Updater result: put this node in the target's slot."""

    node: Node


@dataclass(frozen=True)
class Remove:
    """Updater result: drop the target's slot from its parent."""


Rewrite = Keep | Remove


@dataclass(frozen=True)
class SiblingResult:
    """Outcome of an add-sibling edit.

    ``new_id`` names the node that should receive input focus, or is None
    when the edit did not apply.
    """

    tree: Node
    new_id: str | None = None


@dataclass(frozen=True)
class PositionedNode:
    """A node box placed on the diagram canvas."""

    id: str
    content: str
    x: float
    y: float
    width: float
    height: float
    depth: int
    collapsed: bool = False
    hidden_count: int = 0
    children: tuple["PositionedNode", ...] = ()


@dataclass(frozen=True)
class Layout:
    """A positioned tree plus the height of the whole diagram."""

    root: PositionedNode
    total_height: float


@dataclass(frozen=True)
class Connector:
    """A line from a parent box to one of its visible children."""

    parent_id: str
    child_id: str
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class OutlineRow:
    """One line of the textual outline view."""

    id: str
    path: NodePath
    depth: int
    content: str
    has_children: bool
    collapsed: bool
