"""Tests for path addressing and subtree rewriting."""

from dataclasses import replace

import pytest

from mindmap_outline.core.tree.paths import (
    PathSyntaxError,
    format_path,
    is_valid_path,
    node_at_path,
    parse_path,
    update_node_at_path,
)
from mindmap_outline.models.node import Keep, Node, Remove


def test_node_at_path_walks_child_indices(tree: Node) -> None:
    assert node_at_path(tree, ()) is tree
    assert node_at_path(tree, (0,)).id == "a"  # type: ignore[union-attr]
    assert node_at_path(tree, (0, 1)).id == "a2"  # type: ignore[union-attr]
    assert node_at_path(tree, (1, 0)).id == "b1"  # type: ignore[union-attr]


@pytest.mark.parametrize("path", [(3,), (0, 2), (2, 0), (-1,), (1, 0, 0)])
def test_node_at_path_out_of_range_is_none(tree: Node, path: tuple[int, ...]) -> None:
    assert node_at_path(tree, path) is None
    assert not is_valid_path(tree, path)


def test_update_replaces_target_and_shares_other_branches(tree: Node) -> None:
    new_root = update_node_at_path(
        tree, (0, 1), lambda node: Keep(replace(node, content="changed"))
    )
    assert new_root is not None
    assert node_at_path(new_root, (0, 1)).content == "changed"  # type: ignore[union-attr]
    # Siblings off the edited path are the very same objects
    assert new_root.children[1] is tree.children[1]
    assert new_root.children[0].children[0] is tree.children[0].children[0]
    # Input snapshot untouched
    assert node_at_path(tree, (0, 1)).content == "Alpha two"  # type: ignore[union-attr]


def test_update_remove_drops_the_slot(tree: Node) -> None:
    new_root = update_node_at_path(tree, (0, 0), lambda _node: Remove())
    assert new_root is not None
    assert [c.id for c in new_root.children[0].children] == ["a2"]


def test_update_out_of_range_returns_same_tree(tree: Node) -> None:
    calls: list[Node] = []

    def updater(node: Node) -> Keep:
        calls.append(node)
        return Keep(node)

    assert update_node_at_path(tree, (5, 0), updater) is tree
    assert calls == []


def test_update_removing_root_returns_none(tree: Node) -> None:
    assert update_node_at_path(tree, (), lambda _node: Remove()) is None


def test_update_keep_same_node_preserves_identity(tree: Node) -> None:
    assert update_node_at_path(tree, (1, 0), Keep) is tree


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", ()),
        (".", ()),
        ("0", (0,)),
        ("0.2.1", (0, 2, 1)),
        (" 1.0 ", (1, 0)),
        ("/0/2", (0, 2)),
    ],
)
def test_parse_path(text: str, expected: tuple[int, ...]) -> None:
    assert parse_path(text) == expected


@pytest.mark.parametrize("text", ["a.b", "0..1", "-1", "1.x"])
def test_parse_path_rejects_malformed_text(text: str) -> None:
    with pytest.raises(PathSyntaxError):
        parse_path(text)


def test_format_path() -> None:
    assert format_path(()) == "."
    assert format_path((0, 2, 1)) == "0.2.1"
