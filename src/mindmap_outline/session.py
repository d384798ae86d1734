"""Editing session: the single piece of mutable state around the tree store."""

from loguru import logger

from mindmap_outline.config import LayoutSettings, resolve_layout_settings
from mindmap_outline.core.layout.engine import layout_with_settings
from mindmap_outline.core.tree import store
from mindmap_outline.core.tree.outline import outline_rows
from mindmap_outline.core.tree.paths import format_path
from mindmap_outline.models.node import Layout, Node, NodePath, OutlineRow, SiblingResult
from mindmap_outline.protocols import IdFactory


class MindMapSession:
    """Holds the current snapshot and applies one edit at a time.

    Each gesture replaces the snapshot with the store's result; old snapshots
    stay valid for whoever still holds them. After an insert, ``focus_id``
    names the node the outline view should move input focus to.
    """

    def __init__(self, root: Node | None = None, *, id_factory: IdFactory | None = None) -> None:
        self._root = root if root is not None else store.create_tree()
        self.id_factory = id_factory
        self.focus_id: str | None = None
        self.revision = 0

    @property
    def root(self) -> Node:
        return self._root

    def _commit(self, new_root: Node, action: str) -> Node:
        if new_root is self._root:
            logger.debug("No-op: {}", action)
            return new_root
        self._root = new_root
        self.revision += 1
        logger.debug("Applied {} (revision {})", action, self.revision)
        return new_root

    def take_focus(self) -> str | None:
        """Return the pending focus request and clear it."""
        focus_id, self.focus_id = self.focus_id, None
        return focus_id

    # --- Gestures ---

    def add_child(self, parent_id: str) -> Node:
        before = self._root
        new_root = self._commit(
            store.add_child(before, parent_id, id_factory=self.id_factory),
            f"add-child {parent_id}",
        )
        if new_root is not before:
            parent = store.find_node(new_root, parent_id)
            if parent is not None:
                self.focus_id = parent.children[-1].id
        return new_root

    def delete_node(self, node_id: str) -> Node:
        new_root = self._commit(store.delete_node(self._root, node_id), f"delete {node_id}")
        if self.focus_id is not None and store.find_node(new_root, self.focus_id) is None:
            self.focus_id = None
        return new_root

    def update_content(self, node_id: str, text: str) -> Node:
        return self._commit(store.update_content(self._root, node_id, text), f"rename {node_id}")

    def toggle_collapse(self, node_id: str) -> Node:
        return self._commit(store.toggle_collapse(self._root, node_id), f"toggle {node_id}")

    def add_sibling(self, path: NodePath) -> SiblingResult:
        result = store.add_sibling(self._root, path, id_factory=self.id_factory)
        self._commit(result.tree, f"add-sibling {format_path(path)}")
        if result.new_id is not None:
            self.focus_id = result.new_id
        return result

    def indent(self, path: NodePath) -> Node:
        return self._commit(store.indent(self._root, path), f"indent {format_path(path)}")

    def outdent(self, path: NodePath) -> Node:
        return self._commit(store.outdent(self._root, path), f"outdent {format_path(path)}")

    # --- Views ---

    def path_of(self, node_id: str) -> NodePath | None:
        return store.find_path(self._root, node_id)

    def outline(self) -> list[OutlineRow]:
        return outline_rows(self._root)

    def layout(self, settings: LayoutSettings | None = None) -> Layout:
        return layout_with_settings(self._root, settings or resolve_layout_settings())
