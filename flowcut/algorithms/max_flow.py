"""Maximum-flow computation via breadth-first augmenting paths (Edmonds-Karp).

The engine is a pure function of its inputs: it builds a private residual
graph, repeatedly augments along shortest (fewest-arc) paths until the sink
is unreachable, then derives the minimum cut from the nodes still reachable
from the source. Provides helpers for saturated-edge detection and simple
per-edge capacity sensitivity analysis.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterable, List, Optional

from flowcut.algorithms.bfs import bfs, trace_path
from flowcut.algorithms.residual import ResidualGraph
from flowcut.config import ENGINE_CONFIG, EngineConfig
from flowcut.logging import get_logger
from flowcut.types import AugmentingPath, EdgeID, FlowResult, MinCut, NodeID

if TYPE_CHECKING:
    from flowcut.model.graph import Edge, Node

logger = get_logger(__name__)


def _node_id(node: Any) -> NodeID:
    """Accept ``Node`` objects or bare ids."""
    return getattr(node, "id", node)


def calc_max_flow(
    nodes: Iterable[Node | NodeID],
    edges: Iterable[Edge],
    source_id: NodeID,
    sink_id: NodeID,
    *,
    config: Optional[EngineConfig] = None,
) -> FlowResult:
    """Compute the maximum S-T flow, the minimum cut and all augmenting paths.

    Each iteration runs a BFS from the source over arcs with positive residual
    capacity; arcs are explored in the order edges were supplied, which makes
    path discovery deterministic. The bottleneck of the path found is pushed
    through the exact arcs the search used. When the sink can no longer be
    reached, the nodes still reachable from the source form the source side of
    the minimum cut.

    Input nodes and edges are never mutated; incoming ``Edge.flow`` values are
    ignored. Edges with non-positive capacity behave as absent.

    Args:
        nodes: ``Node`` objects (or bare node ids) in display order.
        edges: Edge-like objects exposing ``id``, ``source``, ``target`` and
            ``capacity``.
        source_id: Id of the source node.
        sink_id: Id of the sink node. Equal to ``source_id`` yields zero flow.
        config: Engine options; defaults to ``flowcut.config.ENGINE_CONFIG``.

    Returns:
        FlowResult: Total flow, minimum cut, augmenting paths in discovery
        order, and the final net flow per edge id.

    Raises:
        InvalidReferenceError: If the source, the sink or an edge endpoint is
            not among ``nodes``. Raised before any computation.

    Examples:
        >>> from flowcut.model.graph import Edge
        >>> result = calc_max_flow(["S", "T"], [Edge("e1", "S", "T", 5)], "S", "T")
        >>> result.max_flow
        5
        >>> result.min_cut.edges
        ('e1',)
    """
    cfg = config or ENGINE_CONFIG
    node_ids = [_node_id(n) for n in nodes]
    edge_list = list(edges)

    graph = ResidualGraph.from_edges(node_ids, edge_list)
    src = graph.handle(source_id, "source")
    dst = graph.handle(sink_id, "sink")

    augmenting_paths: List[AugmentingPath] = []
    max_flow = 0

    if src == dst:
        # Degenerate case (s == t): the search is already at the sink before
        # any arc is traversed, so there is nothing to augment.
        logger.debug("Source and sink are the same node %r; max flow is 0", source_id)
    else:
        while True:
            pred = bfs(graph, src, dst)
            if dst not in pred:
                break

            arcs = trace_path(pred, dst)
            bottleneck = min(arc.residual() for arc in arcs)
            for arc in arcs:
                arc.push(bottleneck)

            path = tuple(graph.node_ids[h] for h in [src] + [arc.head for arc in arcs])
            augmenting_paths.append(AugmentingPath(path=path, flow=bottleneck))
            max_flow += bottleneck

            if cfg.log_augmenting_paths:
                logger.debug(
                    "Augmenting path #%d: %s (+%d)",
                    len(augmenting_paths),
                    " -> ".join(str(n) for n in path),
                    bottleneck,
                )

    min_cut = _min_cut(graph, src, edge_list)

    edge_flows: Dict[EdgeID, int] = {}
    for edge, flow in zip(edge_list, graph.edge_flows()):
        edge_flows[edge.id] = flow

    logger.debug(
        "Max flow %r -> %r: %d over %d augmenting path(s), %d cut edge(s)",
        source_id,
        sink_id,
        max_flow,
        len(augmenting_paths),
        len(min_cut.edges),
    )
    return FlowResult(
        max_flow=max_flow,
        min_cut=min_cut,
        augmenting_paths=tuple(augmenting_paths),
        edge_flows=edge_flows,
    )


#: Alias matching the name used by graph-editing callers.
compute_max_flow = calc_max_flow


def _min_cut(graph: ResidualGraph, src: int, edge_list: List[Edge]) -> MinCut:
    """Partition nodes by residual reachability and collect crossing edges."""
    reachable = bfs(graph, src)

    source_set = []
    sink_set = []
    for handle, node_id in enumerate(graph.node_ids):
        if handle in reachable:
            source_set.append(node_id)
        else:
            sink_set.append(node_id)

    # Only edges from the source side into the sink side belong to the cut;
    # backward crossings are excluded even when saturated. Edges without
    # positive capacity are treated as absent.
    source_handles = set(reachable)
    cut_edges = []
    for edge_index, edge in enumerate(edge_list):
        forward = graph.forward_arc(edge_index)
        if forward.capacity <= 0:
            continue
        if forward.tail in source_handles and forward.head not in source_handles:
            cut_edges.append(edge.id)

    return MinCut(
        edges=tuple(cut_edges),
        source_set=tuple(source_set),
        sink_set=tuple(sink_set),
    )


def saturated_edges(
    nodes: Iterable[Node | NodeID],
    edges: Iterable[Edge],
    source_id: NodeID,
    sink_id: NodeID,
    **kwargs,
) -> List[EdgeID]:
    """Identify saturated edges in the max-flow solution.

    Args:
        nodes: Nodes (or ids) of the graph.
        edges: Edges of the graph.
        source_id: Source node id.
        sink_id: Sink node id.
        **kwargs: Additional arguments passed to calc_max_flow.

    Returns:
        List[EdgeID]: Ids of edges with positive capacity whose flow equals
        their capacity, in input order.
    """
    edge_list = list(edges)
    result = calc_max_flow(nodes, edge_list, source_id, sink_id, **kwargs)
    return _saturated(edge_list, result)


def _saturated(edge_list: List[Edge], result: FlowResult) -> List[EdgeID]:
    return [
        edge.id
        for edge in edge_list
        if edge.capacity > 0 and result.edge_flows[edge.id] >= edge.capacity
    ]


def run_sensitivity(
    nodes: Iterable[Node | NodeID],
    edges: Iterable[Edge],
    source_id: NodeID,
    sink_id: NodeID,
    *,
    change_amount: int = 1,
    **kwargs,
) -> Dict[EdgeID, int]:
    """Simple sensitivity analysis for per-edge capacity changes.

    Changes each saturated edge's capacity by ``change_amount`` (one edge at
    a time, floored at zero) and measures the resulting change in max flow.

    Args:
        nodes: Nodes (or ids) of the graph.
        edges: Edges of the graph; expected to be ``Edge`` dataclasses so a
            modified copy can be made with ``dataclasses.replace``.
        source_id: Source node id.
        sink_id: Sink node id.
        change_amount: Capacity delta (positive increases, negative decreases).
        **kwargs: Additional arguments passed to calc_max_flow.

    Returns:
        Dict[EdgeID, int]: Flow delta per modified edge.
    """
    node_list: List[Any] = list(nodes)
    edge_list = list(edges)

    baseline = calc_max_flow(node_list, edge_list, source_id, sink_id, **kwargs)
    saturated = _saturated(edge_list, baseline)

    sensitivity: Dict[EdgeID, int] = {}
    for edge_id in saturated:
        test_edges = []
        for edge in edge_list:
            if edge.id == edge_id:
                edge = replace(edge, capacity=max(edge.capacity + change_amount, 0))
            test_edges.append(edge)

        new_flow = calc_max_flow(node_list, test_edges, source_id, sink_id, **kwargs)
        sensitivity[edge_id] = new_flow.max_flow - baseline.max_flow

    return sensitivity


def edge_capacities(edges: Iterable[Edge]) -> Dict[Hashable, int]:
    """Map edge id to capacity, for use with ``FlowResult.cut_capacity``."""
    return {edge.id: edge.capacity for edge in edges}
