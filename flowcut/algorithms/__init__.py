"""Max-flow / min-cut algorithms over residual graphs."""

from flowcut.algorithms.max_flow import (
    calc_max_flow,
    compute_max_flow,
    edge_capacities,
    run_sensitivity,
    saturated_edges,
)

__all__ = [
    "calc_max_flow",
    "compute_max_flow",
    "edge_capacities",
    "run_sensitivity",
    "saturated_edges",
]
