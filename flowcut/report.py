"""Plain-text reports for graphs and max-flow results.

Node ids are shown through their labels when a ``GraphState`` is supplied,
otherwise ids are printed as-is.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from flowcut.config import REPORT_CONFIG, ReportConfig
from flowcut.model.graph import GraphState
from flowcut.types import FlowResult


_INDENT = "   "
_ELLIPSIS = "..."


def _clip(value: Any, limit: Optional[int]) -> str:
    text = str(value)
    if limit is None:
        return text
    # Leave room for at least one visible character before the ellipsis
    limit = max(limit, len(_ELLIPSIS) + 1)
    if len(text) <= limit:
        return text
    return text[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Render rows as a left-aligned ASCII table indented by three spaces.

    Args:
        headers: Column headers.
        rows: Data rows, one cell per header.
        min_width: Minimum column width.
        max_col_width: Cells longer than this are cut and end in "...". Widths
            below 4 are raised to 4. ``None`` disables clipping.

    Returns:
        Formatted table string, or ``""`` when there are no rows.
    """
    if not rows:
        return ""

    grid = [[_clip(cell, max_col_width) for cell in line] for line in [headers, *rows]]
    widths = [max(min_width, *(len(cell) for cell in column)) for column in zip(*grid)]

    def render(cells: List[str]) -> str:
        return _INDENT + " | ".join(cell.ljust(w) for cell, w in zip(cells, widths))

    header, *body = grid
    rule = _INDENT + "-+-".join("-" * w for w in widths)
    return "\n".join([render(header), rule, *(render(line) for line in body)])


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    if n == 1:
        return singular
    return plural or (singular + "s")


def _labeler(state: Optional[GraphState]) -> Callable[[Any], str]:
    if state is None:
        return str
    return state.label_of


def format_result(
    result: FlowResult,
    state: Optional[GraphState] = None,
    config: Optional[ReportConfig] = None,
) -> str:
    """Render a ``FlowResult`` as a multi-section text report.

    Sections: maximum flow, augmenting paths (labels joined by the configured
    separator with the pushed amount), min-cut edges, and the node partition.
    """
    cfg = config or REPORT_CONFIG
    label = _labeler(state)
    lines = []

    lines.append(f"Maximum flow: {result.max_flow}")

    count = len(result.augmenting_paths)
    lines.append("")
    lines.append(f"Augmenting paths ({count}):")
    if count:
        rows = [
            [str(i), cfg.format_path([label(n) for n in p.path]), f"+{p.flow}"]
            for i, p in enumerate(result.augmenting_paths, start=1)
        ]
        lines.append(
            format_table(
                ["#", "Path", "Flow"],
                rows,
                min_width=1,
                max_col_width=cfg.max_col_width,
            )
        )
    else:
        lines.append("   (none)")

    cut_count = len(result.min_cut.edges)
    lines.append("")
    lines.append(f"Minimum cut ({cut_count} {_plural(cut_count, 'edge')}):")
    if cut_count and state is not None:
        rows = []
        for edge_id in result.min_cut.edges:
            edge = state.get_edge(edge_id)
            rows.append(
                [edge_id, label(edge.source), label(edge.target), edge.capacity]
            )
        lines.append(
            format_table(
                ["Edge", "From", "To", "Capacity"],
                rows,
                min_width=cfg.table_min_width,
                max_col_width=cfg.max_col_width,
            )
        )
    elif cut_count:
        lines.append("   " + ", ".join(str(e) for e in result.min_cut.edges))
    else:
        lines.append("   (none)")

    lines.append("")
    lines.append(
        "Source side: {" + ", ".join(label(n) for n in result.min_cut.source_set) + "}"
    )
    lines.append(
        "Sink side:   {" + ", ".join(label(n) for n in result.min_cut.sink_set) + "}"
    )
    return "\n".join(lines)


def format_graph(state: GraphState, config: Optional[ReportConfig] = None) -> str:
    """Render node and edge tables for a graph."""
    cfg = config or REPORT_CONFIG
    lines = [
        f"Nodes: {len(state.nodes)}   Edges: {len(state.edges)}",
        f"Source: {state.source.label if state.source else '-'}   "
        f"Sink: {state.sink.label if state.sink else '-'}",
    ]

    node_rows = [[n.id, n.label, n.role.label] for n in state.nodes]
    if node_rows:
        lines.append("")
        lines.append(
            format_table(
                ["Id", "Label", "Role"],
                node_rows,
                min_width=cfg.table_min_width,
                max_col_width=cfg.max_col_width,
            )
        )

    edge_rows = [
        [e.id, state.label_of(e.source), state.label_of(e.target), e.capacity]
        for e in state.edges
    ]
    if edge_rows:
        lines.append("")
        lines.append(
            format_table(
                ["Id", "From", "To", "Capacity"],
                edge_rows,
                min_width=cfg.table_min_width,
                max_col_width=cfg.max_col_width,
            )
        )
    return "\n".join(lines)
