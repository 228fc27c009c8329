"""Enums and immutable result containers for max-flow analysis.

``FlowResult`` is what the engine hands back to callers: total flow, the
minimum cut and every augmenting path in discovery order. All containers are
frozen and expose ``to_dict()`` returning JSON-safe primitives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, Mapping, Tuple

#: Identifier of a node or an edge. The editor uses strings; the engine
#: accepts any hashable value.
NodeID = Hashable
EdgeID = Hashable


class NodeRole(IntEnum):
    """Role a node plays in an S-T flow problem."""

    REGULAR = 0
    SOURCE = 1
    SINK = 2

    @classmethod
    def from_string(cls, value: str) -> "NodeRole":
        """Parse a case-insensitive role name such as ``"source"``.

        Raises:
            ValueError: If the string doesn't match any role.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            valid = ", ".join(e.name.lower() for e in cls)
            raise ValueError(
                f"Invalid node role '{value}'. Valid values are: {valid}"
            ) from None

    @property
    def label(self) -> str:
        """Lower-case name used in files and reports."""
        return self.name.lower()


@dataclass(frozen=True)
class AugmentingPath:
    """One augmentation step of the max-flow loop.

    Attributes:
        path: Node ids from source to sink, both inclusive.
        flow: Bottleneck amount pushed along ``path``.
    """

    path: Tuple[NodeID, ...]
    flow: int

    def __post_init__(self) -> None:
        if len(self.path) < 2:
            raise ValueError("AugmentingPath.path must contain at least two nodes")
        if self.flow <= 0:
            raise ValueError("AugmentingPath.flow must be positive")

    def arcs(self) -> Iterable[Tuple[NodeID, NodeID]]:
        """Yield consecutive ``(u, v)`` node pairs along the path."""
        return zip(self.path, self.path[1:])

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {"path": list(self.path), "flow": self.flow}


@dataclass(frozen=True)
class MinCut:
    """Minimum S-T cut derived from the final residual graph.

    Attributes:
        edges: Ids of input edges leading from ``source_set`` into ``sink_set``.
        source_set: Nodes reachable from the source in the final residual graph.
        sink_set: Every other node, including nodes unreachable from anywhere.
    """

    edges: Tuple[EdgeID, ...]
    source_set: Tuple[NodeID, ...]
    sink_set: Tuple[NodeID, ...]

    def side_of(self, node_id: NodeID) -> str:
        """Return ``"source"`` or ``"sink"`` for a node of the partition."""
        if node_id in self.source_set:
            return "source"
        if node_id in self.sink_set:
            return "sink"
        raise KeyError(node_id)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "edges": list(self.edges),
            "source_set": list(self.source_set),
            "sink_set": list(self.sink_set),
        }


@dataclass(frozen=True)
class FlowResult:
    """Outcome of one max-flow computation.

    Attributes:
        max_flow: Total units pushed from source to sink.
        min_cut: Minimum cut whose capacity equals ``max_flow``.
        augmenting_paths: Augmenting paths in the order they were found.
        edge_flows: Final net flow per input edge id, as a read-only mapping.
            Not part of the hash; results still compare by it.
    """

    max_flow: int
    min_cut: MinCut
    augmenting_paths: Tuple[AugmentingPath, ...] = ()
    edge_flows: Mapping[EdgeID, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "edge_flows", MappingProxyType(dict(self.edge_flows)))

    def cut_capacity(self, capacities: Mapping[EdgeID, int]) -> int:
        """Sum the capacities of the cut edges.

        Args:
            capacities: Capacity per edge id, as supplied to the engine.
        """
        return sum(capacities[edge_id] for edge_id in self.min_cut.edges)

    def path_edges(self) -> set:
        """Return ids of edges that carry flow."""
        return {edge_id for edge_id, flow in self.edge_flows.items() if flow > 0}

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "max_flow": self.max_flow,
            "min_cut": self.min_cut.to_dict(),
            "augmenting_paths": [p.to_dict() for p in self.augmenting_paths],
            "edge_flows": {str(k): v for k, v in self.edge_flows.items()},
        }
