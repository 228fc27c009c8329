"""NetworkX graph conversion utilities.

Converts between flowcut's node/edge lists and ``networkx.DiGraph`` so that
graphs can be built with NetworkX generators, or results inspected and drawn
with NetworkX tooling.

Example:
    >>> import networkx as nx
    >>> from flowcut.lib.nx import from_networkx, to_networkx
    >>> from flowcut.algorithms.max_flow import calc_max_flow
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", capacity=10)
    >>> G.add_edge("B", "C", capacity=5)
    >>>
    >>> nodes, edges = from_networkx(G)
    >>> result = calc_max_flow(nodes, edges, "A", "C")
    >>> result.max_flow
    5
    >>> G_out = to_networkx(nodes, edges, result)
    >>> G_out.edges["A", "B"]["flow"]
    5
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Tuple

import networkx as nx

from flowcut.model.graph import Edge, Node
from flowcut.types import FlowResult, NodeRole

if TYPE_CHECKING:
    NxGraph = nx.DiGraph
else:
    NxGraph = Any


def from_networkx(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    default_capacity: int = 1,
    id_attr: str = "id",
) -> Tuple[List[Node], List[Edge]]:
    """Convert a NetworkX directed graph to flowcut nodes and edges.

    Node names are stringified and used as both id and label. Edges keep their
    ``id_attr`` attribute as id when present, otherwise ids are ``"e0"``,
    ``"e1"``, ... in NetworkX edge iteration order. Multigraph parallel edges
    each become a separate edge.

    Args:
        G: A ``nx.DiGraph`` or ``nx.MultiDiGraph``.
        capacity_attr: Edge attribute holding the capacity.
        default_capacity: Capacity for edges without ``capacity_attr``.
        id_attr: Edge attribute holding an explicit edge id.

    Returns:
        Tuple of (nodes, edges).

    Raises:
        TypeError: If ``G`` is undirected.
        ValueError: If a capacity is not an integer.
    """
    if not G.is_directed():
        raise TypeError("from_networkx requires a directed graph")

    nodes = [Node(id=str(n), label=str(n)) for n in G.nodes]

    edges = []
    for index, (u, v, data) in enumerate(G.edges(data=True)):
        capacity = data.get(capacity_attr, default_capacity)
        if isinstance(capacity, float) and capacity.is_integer():
            capacity = int(capacity)
        if not isinstance(capacity, int):
            raise ValueError(
                f"Edge {u!r}->{v!r} has non-integer capacity {capacity!r}"
            )
        edge_id = str(data.get(id_attr, f"e{index}"))
        edges.append(Edge(id=edge_id, source=str(u), target=str(v), capacity=capacity))
    return nodes, edges


def to_networkx(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    result: Optional[FlowResult] = None,
) -> nx.DiGraph:
    """Convert flowcut nodes and edges to a ``networkx.DiGraph``.

    Node attributes: ``label``, ``role`` (lower-case name), ``x``, ``y``.
    Edge attributes: ``id`` and ``capacity``; with a ``result`` also ``flow``
    and ``in_cut``, and node attribute ``side`` (``"source"``/``"sink"``).

    Raises:
        ValueError: If an edge endpoint is not among ``nodes``, or two edges
            share the same ordered node pair.
    """
    G = nx.DiGraph()
    for node in nodes:
        role = node.role if isinstance(node.role, NodeRole) else NodeRole.REGULAR
        G.add_node(node.id, label=node.label, role=role.label, x=node.x, y=node.y)

    cut = set(result.min_cut.edges) if result is not None else set()
    for edge in edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in G:
                raise ValueError(
                    f"Edge {edge.id!r} references unknown node {endpoint!r}"
                )
        if G.has_edge(edge.source, edge.target):
            raise ValueError(
                f"Duplicate edge {edge.source!r}->{edge.target!r} cannot be "
                "represented in a DiGraph"
            )
        attrs = {"id": edge.id, "capacity": edge.capacity}
        if result is not None:
            attrs["flow"] = result.edge_flows.get(edge.id, 0)
            attrs["in_cut"] = edge.id in cut
        G.add_edge(edge.source, edge.target, **attrs)

    if result is not None:
        for node_id in G.nodes:
            G.nodes[node_id]["side"] = result.min_cut.side_of(node_id)
    return G
