"""Tests for the editing session."""

from mindmap_outline.core.tree.store import find_node
from mindmap_outline.session import MindMapSession
from tests.unit.fakes import FakeIdFactory


def test_new_session_starts_from_single_root() -> None:
    session = MindMapSession()
    assert session.root.id == "root"
    assert session.root.children == ()
    assert session.revision == 0
    assert session.focus_id is None


def test_add_sibling_sets_focus_request(session: MindMapSession) -> None:
    result = session.add_sibling((2,))
    assert result.new_id == "n1"
    assert session.focus_id == "n1"
    assert session.root is result.tree
    assert session.take_focus() == "n1"
    assert session.focus_id is None


def test_add_child_focuses_new_node(session: MindMapSession) -> None:
    session.add_child("c")
    assert session.focus_id == "n1"
    c = find_node(session.root, "c")
    assert c is not None
    assert [child.id for child in c.children] == ["n1"]


def test_old_snapshot_survives_edits(session: MindMapSession) -> None:
    before = session.root
    session.indent((1,))
    session.delete_node("a1")
    assert [c.id for c in before.children] == ["a", "b", "c"]
    assert [c.id for c in session.root.children] == ["a", "c"]


def test_revision_counts_only_real_changes(session: MindMapSession) -> None:
    session.update_content("a", "Changed")
    assert session.revision == 1
    session.delete_node("root")
    session.indent((0,))
    session.outdent((1,))
    session.toggle_collapse("c")
    session.update_content("missing", "x")
    assert session.revision == 1
    session.toggle_collapse("a")
    assert session.revision == 2


def test_noop_sibling_keeps_previous_focus(session: MindMapSession) -> None:
    session.add_sibling((0,))
    result = session.add_sibling(())
    assert result.new_id is None
    assert session.focus_id == "n1"


def test_deleting_focused_node_clears_focus(session: MindMapSession) -> None:
    session.add_sibling((0, 0))
    session.delete_node("a")
    assert session.focus_id is None


def test_views_follow_current_snapshot(session: MindMapSession) -> None:
    session.toggle_collapse("a")
    assert [r.id for r in session.outline()] == ["a", "b", "b1", "c"]
    assert session.path_of("b1") == (1, 0)
    boxes = session.layout().root.children
    assert [b.id for b in boxes] == ["a", "b", "c"]


def test_session_uses_injected_id_factory() -> None:
    ids = FakeIdFactory(["x"])
    session = MindMapSession(id_factory=ids)
    session.add_child("root")
    assert ids.issued == ["x"]
    assert session.focus_id == "x"
