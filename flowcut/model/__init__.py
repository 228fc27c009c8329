"""Graph model package.

Defines the editable flow network (nodes, edges, source/sink roles) that
feeds the max-flow engine.
"""

from flowcut.model.graph import Edge, EdgeView, GraphState, Node

__all__ = [
    "Node",
    "Edge",
    "EdgeView",
    "GraphState",
]
