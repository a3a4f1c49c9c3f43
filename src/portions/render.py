"""Text renderings of a built portion graph (table, JSON, DOT, Mermaid).

Every node is emitted, connected or not.  Edges run supplier -> consumer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Literal, get_args

from portions.schema import NodeKind, is_member_kind

if TYPE_CHECKING:
    from portions.graph import PortionGraph

OutputFormat = Literal["table", "json", "dot", "mermaid"]
RankDir = Literal["TB", "LR", "BT", "RL"]

OUTPUT_FORMATS: tuple[str, ...] = get_args(OutputFormat)
RANK_DIRS: tuple[str, ...] = get_args(RankDir)

_DOT_STYLES: dict[NodeKind, str] = {
    NodeKind.ATTRIBUTE: 'shape=ellipse, style=filled, fillcolor="lightgoldenrod"',
    NodeKind.OPERATION: 'shape=box, style="filled,rounded", fillcolor="lightblue"',
    NodeKind.EXTERNAL_REFERENCE: 'shape=box, style=dashed, color="#555555"',
}

# Mermaid node shapes as (open, close) delimiters
_MERMAID_SHAPES: dict[NodeKind, tuple[str, str]] = {
    NodeKind.ATTRIBUTE: ("([", "])"),
    NodeKind.OPERATION: ("[", "]"),
    NodeKind.EXTERNAL_REFERENCE: ("[[", "]]"),
}


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _mermaid_escape(text: str) -> str:
    return text.replace('"', "#quot;")


def render_table(graph: PortionGraph) -> str:
    """Human-readable listing: numbered nodes, then ``supplier -> consumer`` lines."""
    title = graph.class_name or "<none>"
    lines = [f"Portion graph: {title} ({len(graph.nodes)} nodes, {len(graph.connections)} connections)"]
    if not graph.nodes:
        return "\n".join(lines)
    lines.append("Nodes:")
    for i, node in enumerate(graph.nodes):
        lines.append(f"  {i:>3}  {node.kind:<17}  {node.name}")
    if graph.connections:
        lines.append("Connections:")
        for conn in graph.connections:
            supplier = graph.get_node(conn.supplier)
            consumer = graph.get_node(conn.consumer)
            lines.append(f"  {supplier.name} -> {consumer.name}")
    return "\n".join(lines)


def render_json(graph: PortionGraph) -> str:
    return json.dumps(graph.to_dict(), indent=2)


def render_dot(graph: PortionGraph, *, rankdir: RankDir = "LR") -> str:
    """Graphviz digraph; raises ``ValueError`` for an unknown *rankdir*."""
    if rankdir not in RANK_DIRS:
        msg = f"Unknown rank direction: {rankdir!r} (use {', '.join(RANK_DIRS)})"
        raise ValueError(msg)
    name = _dot_escape(graph.class_name or "portions")
    lines = [
        f'digraph "{name}" {{',
        f"  rankdir={rankdir};",
        '  node [fontsize=12, fontname="Arial"];',
    ]
    for i, node in enumerate(graph.nodes):
        lines.append(f'  n{i} [label="{_dot_escape(node.name)}", {_DOT_STYLES[node.kind]}];')
    for conn in graph.connections:
        lines.append(f"  n{conn.supplier} -> n{conn.consumer};")
    lines.append("}")
    return "\n".join(lines)


def render_mermaid(graph: PortionGraph) -> str:
    lines = ["flowchart LR"]
    for i, node in enumerate(graph.nodes):
        open_, close = _MERMAID_SHAPES[node.kind]
        lines.append(f'  n{i}{open_}"{_mermaid_escape(node.name)}"{close}')
    for conn in graph.connections:
        # External references are drawn dotted
        arrow = "-->" if is_member_kind(graph.get_node(conn.supplier).kind) else "-.->"
        lines.append(f"  n{conn.supplier} {arrow} n{conn.consumer}")
    return "\n".join(lines)


def render(graph: PortionGraph, fmt: str, *, rankdir: RankDir = "LR") -> str:
    """Dispatch on *fmt*; raises ``ValueError`` for unknown formats."""
    if fmt == "table":
        return render_table(graph)
    if fmt == "json":
        return render_json(graph)
    if fmt == "dot":
        return render_dot(graph, rankdir=rankdir)
    if fmt == "mermaid":
        return render_mermaid(graph)
    msg = f"Unknown output format: {fmt!r}"
    raise ValueError(msg)
