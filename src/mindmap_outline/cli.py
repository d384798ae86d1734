"""CLI for the mind-map outline editor (outline, layout, shell, MCP server)."""

import json
import sys
from dataclasses import replace
from typing import Annotated

import typer
from loguru import logger

from mindmap_outline.commands import GestureError, apply_gesture, apply_gestures
from mindmap_outline.config import resolve_layout_settings
from mindmap_outline.core.layout.engine import layout_to_dict
from mindmap_outline.core.tree.outline import render_outline_as_markdown
from mindmap_outline.core.tree.paths import format_path
from mindmap_outline.core.tree.store import SequentialIdFactory
from mindmap_outline.logging_config import configure_logging
from mindmap_outline.session import MindMapSession

app = typer.Typer(help="Mind-map outline editor: edit a tree and view it as outline or diagram.")

GesturesArg = Annotated[
    list[str] | None,
    typer.Argument(help="Gestures such as 'add-child root' or 'indent 1'. Read from stdin if '-'."),
]
SeqIdsOpt = Annotated[
    bool,
    typer.Option("--seq-ids", help="Use sequential ids n1, n2, ... instead of random ones"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _build_session(gestures: list[str] | None, *, seq_ids: bool) -> MindMapSession:
    """Apply command-line gestures to a fresh session, exiting on bad input."""
    session = MindMapSession(id_factory=SequentialIdFactory() if seq_ids else None)
    lines = list(gestures or [])
    if lines == ["-"]:
        lines = sys.stdin.read().splitlines()

    try:
        apply_gestures(session, lines)
    except GestureError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    return session


@app.command()
def outline(
    gestures: GesturesArg = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output rows as JSON"),
    seq_ids: SeqIdsOpt = False,
) -> None:
    """Apply gestures to a new tree and print the outline."""
    session = _build_session(gestures, seq_ids=seq_ids)

    if output_json:
        data = {
            "root": {"id": session.root.id, "content": session.root.content},
            "rows": [
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
            ],
            "focus_id": session.focus_id,
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(render_outline_as_markdown(session.root, max_depth=max_depth), nl=False)


@app.command()
def layout(
    gestures: GesturesArg = None,
    node_width: Annotated[float | None, typer.Option("--node-width", help="Box width")] = None,
    node_height: Annotated[float | None, typer.Option("--node-height", help="Box height")] = None,
    h_spacing: Annotated[
        float | None, typer.Option("--h-spacing", help="Horizontal distance per depth")
    ] = None,
    v_spacing: Annotated[
        float | None, typer.Option("--v-spacing", help="Vertical gap between subtrees")
    ] = None,
    connectors: bool = typer.Option(False, "--connectors", "-c", help="Include connector lines"),
    seq_ids: SeqIdsOpt = False,
) -> None:
    """Apply gestures to a new tree and print the diagram layout as JSON."""
    session = _build_session(gestures, seq_ids=seq_ids)

    settings = resolve_layout_settings()
    overrides = {
        "node_width": node_width,
        "node_height": node_height,
        "h_spacing": h_spacing,
        "v_spacing": v_spacing,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    data = layout_to_dict(session.layout(settings), include_connectors=connectors)
    typer.echo(json.dumps(data, indent=2))


@app.command()
def shell(seq_ids: SeqIdsOpt = False) -> None:
    """Edit a tree interactively, one gesture per line ('quit' to exit)."""
    session = MindMapSession(id_factory=SequentialIdFactory() if seq_ids else None)
    typer.echo(render_outline_as_markdown(session.root), nl=False)

    while True:
        try:
            line = typer.prompt("mindmap", default="", show_default=False)
        except (EOFError, typer.Abort):
            break
        if line.strip().lower() in ("quit", "exit"):
            break

        try:
            new_id = apply_gesture(session, line)
        except GestureError as e:
            logger.error("{}", e)
            continue

        if new_id is not None:
            typer.echo(f"focus -> {new_id}")
        typer.echo(render_outline_as_markdown(session.root), nl=False)


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from mindmap_outline.mcp.server import run_mcp_server

    run_mcp_server()
