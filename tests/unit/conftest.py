"""Shared test fixtures."""

import pytest

from mindmap_outline.core.tree.store import add_child, create_tree
from mindmap_outline.models.node import Node
from mindmap_outline.session import MindMapSession
from tests.unit.fakes import FakeIdFactory


def make_tree() -> Node:
    """Build the sample tree used across tests.

    root "Root"
    ├── a "Alpha"
    │   ├── a1 "Alpha one"
    │   └── a2 "Alpha two"
    ├── b "Beta"
    │   └── b1 "Beta one"
    └── c "Gamma"
    """
    return Node(
        id="root",
        content="Root",
        children=(
            Node(
                id="a",
                content="Alpha",
                children=(Node(id="a1", content="Alpha one"), Node(id="a2", content="Alpha two")),
            ),
            Node(id="b", content="Beta", children=(Node(id="b1", content="Beta one"),)),
            Node(id="c", content="Gamma"),
        ),
    )


CHAIN_DEPTH = 1200


def make_chain(depth: int = CHAIN_DEPTH) -> Node:
    """Build root -> d0 -> d1 -> ... with one child per level, via add_child."""
    chain = create_tree()
    parent = chain.id
    for i in range(depth):
        chain = add_child(chain, parent, new_id=f"d{i}")
        parent = f"d{i}"
    return chain


@pytest.fixture
def tree() -> Node:
    return make_tree()


@pytest.fixture(scope="session")
def deep_chain() -> Node:
    return make_chain()


@pytest.fixture
def id_factory() -> FakeIdFactory:
    return FakeIdFactory(["n1", "n2", "n3", "n4", "n5"])


@pytest.fixture
def session(id_factory: FakeIdFactory) -> MindMapSession:
    """Return a session over the sample tree with scripted ids."""
    return MindMapSession(make_tree(), id_factory=id_factory)
