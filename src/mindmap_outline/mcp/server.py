"""MCP server exposing mind-map editing tools over an in-memory session."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from mindmap_outline.config import resolve_layout_settings
from mindmap_outline.core.layout.engine import layout_to_dict
from mindmap_outline.core.tree.outline import render_outline_as_markdown
from mindmap_outline.core.tree.paths import PathSyntaxError, format_path, parse_path
from mindmap_outline.models.node import Node, NodePath
from mindmap_outline.session import MindMapSession


def _edit_result(session: MindMapSession, before: Node, **extra: Any) -> dict[str, Any]:
    output: dict[str, Any] = {
        "success": True,
        "changed": session.root is not before,
        "revision": session.revision,
    }
    output.update(extra)
    return output


def _parse(path: str) -> NodePath | dict[str, Any]:
    try:
        return parse_path(path)
    except PathSyntaxError as e:
        return {"success": False, "error": str(e)}


# --- Core functions (testable without MCP context) ---


def mindmap_get_outline(
    session: MindMapSession,
    *,
    max_depth: int | None = None,
    output_format: str = "markdown",
) -> dict[str, Any]:
    """Return the outline as markdown or as a list of rows.

    Args:
        max_depth: Max depth levels to include (None = unlimited).
        output_format: "markdown" or "json".
    """
    output: dict[str, Any] = {
        "root_id": session.root.id,
        "revision": session.revision,
        "focus_id": session.focus_id,
    }
    if output_format == "json":
        output["rows"] = [
            {
                "id": row.id,
                "path": format_path(row.path),
                "depth": row.depth,
                "content": row.content,
                "has_children": row.has_children,
                "collapsed": row.collapsed,
            }
            for row in session.outline()
            if max_depth is None or row.depth <= max_depth
        ]
    else:
        output["content"] = render_outline_as_markdown(session.root, max_depth=max_depth)
    return output


def mindmap_get_layout(
    session: MindMapSession, *, include_connectors: bool = False
) -> dict[str, Any]:
    """Return the positioned diagram boxes of every visible node."""
    layout = session.layout(resolve_layout_settings())
    return layout_to_dict(layout, include_connectors=include_connectors)


def mindmap_add_child(session: MindMapSession, *, parent_id: str) -> dict[str, Any]:
    before = session.root
    session.add_child(parent_id)
    if session.root is before:
        return _edit_result(session, before)
    return _edit_result(session, before, node_id=session.focus_id)


def mindmap_add_sibling(session: MindMapSession, *, path: str) -> dict[str, Any]:
    parsed = _parse(path)
    if isinstance(parsed, dict):
        return parsed
    before = session.root
    result = session.add_sibling(parsed)
    if result.new_id is None:
        return _edit_result(session, before)
    return _edit_result(session, before, node_id=result.new_id)


def mindmap_delete_node(session: MindMapSession, *, node_id: str) -> dict[str, Any]:
    before = session.root
    session.delete_node(node_id)
    return _edit_result(session, before)


def mindmap_update_content(
    session: MindMapSession, *, node_id: str, content: str
) -> dict[str, Any]:
    before = session.root
    session.update_content(node_id, content)
    return _edit_result(session, before, node_id=node_id)


def mindmap_toggle_collapse(session: MindMapSession, *, node_id: str) -> dict[str, Any]:
    before = session.root
    session.toggle_collapse(node_id)
    return _edit_result(session, before, node_id=node_id)


def mindmap_indent(session: MindMapSession, *, path: str) -> dict[str, Any]:
    parsed = _parse(path)
    if isinstance(parsed, dict):
        return parsed
    before = session.root
    session.indent(parsed)
    return _edit_result(session, before)


def mindmap_outdent(session: MindMapSession, *, path: str) -> dict[str, Any]:
    parsed = _parse(path)
    if isinstance(parsed, dict):
        return parsed
    before = session.root
    session.outdent(parsed)
    return _edit_result(session, before)


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    session: MindMapSession
    edit_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Start every server with a fresh single-root tree."""
    session = MindMapSession()
    logger.info("Mind map session started with root {}", session.root.id)
    try:
        yield ServerContext(session=session)
    finally:
        logger.info("Mind map session closed after {} edits", session.revision)


mcp_server = FastMCP(
    "mindmap-outline",
    instructions="""\
A mind map is a tree of text nodes. The root always exists and cannot be deleted.

Nodes are addressed two ways:
- by id (add_child, delete_node, update_content, toggle_collapse), and
- by path: dot-separated child indices from the root, e.g. "0.2" is the third
  child of the first child (add_sibling, indent, outdent).

Paths shift after every structural edit. Call mindmap_get_outline_tool with
output_format="json" to read the current path of each node before using one.
Edits that do not apply (unknown id, first child indent, ...) report
changed=false instead of failing.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def mindmap_get_outline_tool(
    ctx: Context,
    max_depth: int | None = None,
    output_format: str = "markdown",
) -> dict[str, Any]:
    """Read the mind map as an indented outline.

    Args:
        max_depth: Max depth levels (None = unlimited).
        output_format: "markdown" (human-readable) or "json" (rows with id and path).
    """
    return mindmap_get_outline(_ctx(ctx).session, max_depth=max_depth, output_format=output_format)


@mcp_server.tool()
async def mindmap_get_layout_tool(ctx: Context, include_connectors: bool = False) -> dict[str, Any]:
    """Get diagram coordinates (x, y, width, height) of every visible node.

    Args:
        include_connectors: Also return parent-to-child line segments.
    """
    return mindmap_get_layout(_ctx(ctx).session, include_connectors=include_connectors)


@mcp_server.tool()
async def mindmap_add_child_tool(ctx: Context, parent_id: str) -> dict[str, Any]:
    """Append a new placeholder node as the last child of a node.

    Args:
        parent_id: Id of the parent node.
    """
    server = _ctx(ctx)
    async with server.edit_lock:
        return mindmap_add_child(server.session, parent_id=parent_id)


@mcp_server.tool()
async def mindmap_add_sibling_tool(ctx: Context, path: str) -> dict[str, Any]:
    """Insert an empty node right after the node at a path.

    Args:
        path: Dot-separated child indices, e.g. "0.1".
    """
    server = _ctx(ctx)
    async with server.edit_lock:
        return mindmap_add_sibling(server.session, path=path)


@mcp_server.tool()
async def mindmap_delete_node_tool(ctx: Context, node_id: str) -> dict[str, Any]:
    """Delete a node and everything below it. The root cannot be deleted.

    Args:
        node_id: Id of the node to delete.
    """
    server = _ctx(ctx)
    async with server.edit_lock:
        return mindmap_delete_node(server.session, node_id=node_id)


@mcp_server.tool()
async def mindmap_update_content_tool(ctx: Context, node_id: str, content: str) -> dict[str, Any]:
    """Replace the text of a node.

    Args:
        node_id: Id of the node to edit.
        content: New content text.
    """
    server = _ctx(ctx)
    async with server.edit_lock:
        return mindmap_update_content(server.session, node_id=node_id, content=content)


@mcp_server.tool()
async def mindmap_toggle_collapse_tool(ctx: Context, node_id: str) -> dict[str, Any]:
    """Collapse or expand a node. Leaves cannot be collapsed.

    Args:
        node_id: Id of the node.
    """
    server = _ctx(ctx)
    async with server.edit_lock:
        return mindmap_toggle_collapse(server.session, node_id=node_id)


@mcp_server.tool()
async def mindmap_indent_tool(ctx: Context, path: str) -> dict[str, Any]:
    """Move the node at a path under its previous sibling, as its last child.

    Args:
        path: Dot-separated child indices, e.g. "0.1".
    """
    server = _ctx(ctx)
    async with server.edit_lock:
        return mindmap_indent(server.session, path=path)


@mcp_server.tool()
async def mindmap_outdent_tool(ctx: Context, path: str) -> dict[str, Any]:
    """Move the node at a path to right after its parent.

    Siblings that followed it become its trailing children.

    Args:
        path: Dot-separated child indices, e.g. "0.1.2".
    """
    server = _ctx(ctx)
    async with server.edit_lock:
        return mindmap_outdent(server.session, path=path)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from mindmap_outline.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
