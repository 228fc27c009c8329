"""flowcut: maximum flow and minimum cut on small directed graphs.

flowcut computes the maximum S-T flow of a capacitated directed graph with the
Edmonds-Karp algorithm, reports every augmenting path it used, and derives the
minimum cut from the final residual graph.

Primary API:
    calc_max_flow() - Pure engine: (nodes, edges, source, sink) -> FlowResult
    GraphState - Editable graph with source/sink roles and ``compute()``
    load_graph_yaml() / load_graph_file() - Read graphs from YAML
    from_networkx() / to_networkx() - NetworkX interop

Example:
    from flowcut import GraphState

    g = GraphState()
    s, t = g.add_node("S"), g.add_node("T")
    g.add_edge(s.id, t.id, 5)
    g.set_source(s.id)
    g.set_sink(t.id)
    result = g.compute()
    assert result.max_flow == 5
"""

from __future__ import annotations

from flowcut import cli, logging
from flowcut._version import __version__
from flowcut.algorithms.max_flow import (
    calc_max_flow,
    compute_max_flow,
    run_sensitivity,
    saturated_edges,
)
from flowcut.exceptions import FlowcutError, GraphEditError, InvalidReferenceError
from flowcut.io import load_graph_file, load_graph_yaml
from flowcut.lib.nx import from_networkx, to_networkx
from flowcut.model.graph import Edge, EdgeView, GraphState, Node
from flowcut.types import AugmentingPath, FlowResult, MinCut, NodeRole

__all__ = [
    # Version
    "__version__",
    # Model
    "Node",
    "Edge",
    "EdgeView",
    "GraphState",
    # Engine
    "calc_max_flow",
    "compute_max_flow",
    "saturated_edges",
    "run_sensitivity",
    # Types
    "NodeRole",
    "AugmentingPath",
    "MinCut",
    "FlowResult",
    # Errors
    "FlowcutError",
    "InvalidReferenceError",
    "GraphEditError",
    # I/O and integrations
    "load_graph_yaml",
    "load_graph_file",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
