"""Parse textual editing gestures and apply them to a session.

Grammar, one gesture per line::

    add-child <id>        append a placeholder child
    delete <id>           delete a node and its subtree
    rename <id> <text>    replace a node's content
    toggle <id>           collapse or expand a node
    add-sibling <path>    insert an empty node after the one at <path>
    indent <path>         move a node under its previous sibling
    outdent <path>        move a node after its parent

Paths are dotted child indices (``0.2``); ``.`` is the root. The word
``last`` stands for the node that currently has the focus request, as an id
or as its path.
"""

import shlex
from collections.abc import Callable, Iterable

from mindmap_outline.core.tree.paths import PathSyntaxError, parse_path
from mindmap_outline.models.node import NodePath
from mindmap_outline.session import MindMapSession

LAST = "last"

Handler = Callable[[MindMapSession, list[str]], str | None]


class GestureError(ValueError):
    """A gesture line could not be understood."""


def _resolve_id(session: MindMapSession, token: str) -> str:
    if token != LAST:
        return token
    if session.focus_id is None:
        msg = "'last' used before any node was inserted"
        raise GestureError(msg)
    return session.focus_id


def _resolve_path(session: MindMapSession, token: str) -> NodePath:
    if token == LAST:
        path = session.path_of(_resolve_id(session, token))
        if path is None:
            msg = "'last' refers to a node that no longer exists"
            raise GestureError(msg)
        return path
    try:
        return parse_path(token)
    except PathSyntaxError as e:
        raise GestureError(str(e)) from e


def _id_gesture(action: Callable[[MindMapSession, str], object]) -> Handler:
    def run(session: MindMapSession, args: list[str]) -> str | None:
        if len(args) != 1:
            msg = "expected exactly one node id"
            raise GestureError(msg)
        action(session, _resolve_id(session, args[0]))
        return None

    return run


def _path_gesture(action: Callable[[MindMapSession, NodePath], object]) -> Handler:
    def run(session: MindMapSession, args: list[str]) -> str | None:
        if len(args) != 1:
            msg = "expected exactly one path"
            raise GestureError(msg)
        action(session, _resolve_path(session, args[0]))
        return None

    return run


def _add_child(session: MindMapSession, args: list[str]) -> str | None:
    if len(args) != 1:
        msg = "expected exactly one parent id"
        raise GestureError(msg)
    before = session.root
    session.add_child(_resolve_id(session, args[0]))
    return session.focus_id if session.root is not before else None


def _add_sibling(session: MindMapSession, args: list[str]) -> str | None:
    if len(args) != 1:
        msg = "expected exactly one path"
        raise GestureError(msg)
    return session.add_sibling(_resolve_path(session, args[0])).new_id


def _rename(session: MindMapSession, args: list[str]) -> str | None:
    if not args:
        msg = "expected a node id followed by the new text"
        raise GestureError(msg)
    session.update_content(_resolve_id(session, args[0]), " ".join(args[1:]))
    return None


GESTURES: dict[str, Handler] = {
    "add-child": _add_child,
    "delete": _id_gesture(MindMapSession.delete_node),
    "rename": _rename,
    "toggle": _id_gesture(MindMapSession.toggle_collapse),
    "add-sibling": _add_sibling,
    "indent": _path_gesture(MindMapSession.indent),
    "outdent": _path_gesture(MindMapSession.outdent),
}


def apply_gesture(session: MindMapSession, text: str) -> str | None:
    """Apply one gesture line to ``session``.

    Blank lines and ``#`` comments are ignored.

    Returns:
        The id of the node the gesture inserted, if any.

    Raises:
        GestureError: The line is not a known gesture or its arguments are malformed.
    """
    try:
        tokens = shlex.split(text, comments=True)
    except ValueError as e:
        msg = f"Cannot parse {text!r}: {e}"
        raise GestureError(msg) from e
    if not tokens:
        return None

    name, args = tokens[0].lower(), tokens[1:]
    handler = GESTURES.get(name)
    if handler is None:
        known = ", ".join(sorted(GESTURES))
        msg = f"Unknown gesture {name!r} (known: {known})"
        raise GestureError(msg)
    return handler(session, args)


def apply_gestures(session: MindMapSession, lines: Iterable[str]) -> list[str]:
    """Apply gestures in order and return the ids of inserted nodes."""
    inserted: list[str] = []
    for line in lines:
        new_id = apply_gesture(session, line)
        if new_id is not None:
            inserted.append(new_id)
    return inserted
