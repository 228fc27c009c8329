from collections import deque
from typing import Dict, List, Optional

from flowcut.algorithms.residual import ResidualArc, ResidualGraph


def bfs(
    graph: ResidualGraph,
    src: int,
    dst: Optional[int] = None,
) -> Dict[int, Optional[ResidualArc]]:
    """
    Breadth-first search over arcs with positive residual capacity.

    Returns a mapping of every visited node handle to the arc that first
    reached it (``None`` for ``src``), in visiting order. When ``dst`` is
    given the search stops as soon as ``dst`` is dequeued.
    """
    pred: Dict[int, Optional[ResidualArc]] = {src: None}
    queue = deque([src])
    while queue:
        node = queue.popleft()
        if node == dst:
            break
        for arc in graph.out_arcs(node):
            if arc.head not in pred and arc.residual() > 0:
                # first discovery wins; adjacency order breaks ties
                pred[arc.head] = arc
                queue.append(arc.head)
    return pred


def trace_path(
    pred: Dict[int, Optional[ResidualArc]], dst: int
) -> List[ResidualArc]:
    """
    Walk predecessor arcs back from ``dst``; returns arcs in source-to-dst order.
    """
    arcs = []
    arc = pred[dst]
    while arc is not None:
        arcs.append(arc)
        arc = pred[arc.tail]
    arcs.reverse()
    return arcs
