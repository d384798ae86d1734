"""Tests for the textual gesture parser."""

import pytest

from mindmap_outline.commands import GestureError, apply_gesture, apply_gestures
from mindmap_outline.core.tree.store import SequentialIdFactory, find_node
from mindmap_outline.session import MindMapSession


def test_scripted_editing_session() -> None:
    session = MindMapSession(id_factory=SequentialIdFactory())
    inserted = apply_gestures(
        session,
        [
            "add-child root",
            "add-sibling 0",
            "rename n2 'Second item'",
            "# comment lines are ignored",
            "",
            "indent 1",
        ],
    )
    assert inserted == ["n1", "n2"]
    assert [c.id for c in session.root.children] == ["n1"]
    n2 = find_node(session.root, "n2")
    assert n2 is not None
    assert n2.content == "Second item"


def test_last_refers_to_focus_request() -> None:
    session = MindMapSession(id_factory=SequentialIdFactory())
    apply_gesture(session, "add-child root")
    apply_gesture(session, "add-sibling last")
    apply_gesture(session, "indent last")
    apply_gesture(session, "rename last nested")
    assert [c.id for c in session.root.children] == ["n1"]
    n1 = find_node(session.root, "n1")
    assert n1 is not None
    assert [c.content for c in n1.children] == ["nested"]


def test_rename_joins_remaining_words(session: MindMapSession) -> None:
    apply_gesture(session, "rename c several words here")
    assert find_node(session.root, "c").content == "several words here"  # type: ignore[union-attr]


def test_gestures_on_invalid_targets_are_silent(session: MindMapSession) -> None:
    before = session.root
    assert apply_gesture(session, "delete root") is None
    assert apply_gesture(session, "indent 0") is None
    assert apply_gesture(session, "outdent 9.9") is None
    assert apply_gesture(session, "add-child missing") is None
    assert apply_gesture(session, "add-sibling .") is None
    assert session.root is before


def test_toggle_and_outdent(session: MindMapSession) -> None:
    apply_gesture(session, "toggle a")
    assert find_node(session.root, "a").collapsed is True  # type: ignore[union-attr]
    apply_gesture(session, "outdent 1.0")
    assert [c.id for c in session.root.children] == ["a", "b", "b1", "c"]


@pytest.mark.parametrize(
    "line",
    [
        "jump a",
        "indent",
        "delete a b",
        "indent x.y",
        "rename",
        "add-child 'unterminated",
        "delete last",
    ],
)
def test_malformed_gestures_raise(session: MindMapSession, line: str) -> None:
    with pytest.raises(GestureError):
        apply_gesture(session, line)


def test_gesture_names_are_case_insensitive(session: MindMapSession) -> None:
    assert apply_gesture(session, "ADD-CHILD c") == "n1"
