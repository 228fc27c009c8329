"""Residual graph used by the max-flow engine.

Nodes are addressed by integer handles (their position in the input node
list) and arcs live in one flat list. Every input edge contributes a forward
arc and a reverse arc. The two arcs hold a reference to the same
``FlowCounter``, so pushing flow through either of them updates the single
flow value of the underlying edge.
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, List, Sequence

from flowcut.exceptions import InvalidReferenceError


class FlowCounter:
    """Net flow on one input edge, shared by its forward and reverse arcs."""

    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value = 0


class ResidualArc:
    """One direction of an input edge in the residual graph.

    Attributes:
        tail: Handle of the node the arc leaves.
        head: Handle of the node the arc enters.
        capacity: Nominal capacity (edge capacity forward, 0 reverse).
        edge_index: Position of the originating edge in the input edge list.
        counter: Flow counter shared with the paired arc.
        sign: ``+1`` for the forward view, ``-1`` for the reverse view.
    """

    __slots__ = ("tail", "head", "capacity", "edge_index", "counter", "sign")

    def __init__(
        self,
        tail: int,
        head: int,
        capacity: int,
        edge_index: int,
        counter: FlowCounter,
        sign: int,
    ) -> None:
        self.tail = tail
        self.head = head
        self.capacity = capacity
        self.edge_index = edge_index
        self.counter = counter
        self.sign = sign

    @property
    def flow(self) -> int:
        """Flow as seen from this arc's direction."""
        return self.sign * self.counter.value

    def residual(self) -> int:
        return self.capacity - self.flow

    def push(self, amount: int) -> None:
        """Send ``amount`` units along this arc."""
        self.counter.value += self.sign * amount

    def __repr__(self) -> str:
        kind = "fwd" if self.sign > 0 else "rev"
        return (
            f"ResidualArc({self.tail}->{self.head}, {kind}, "
            f"cap={self.capacity}, flow={self.flow})"
        )


class ResidualGraph:
    """Arena of nodes and paired residual arcs built from an edge list.

    Attributes:
        node_ids: Node ids in input order; a node's handle is its index here.
        arcs: All residual arcs.
        adjacency: Per-node list of indices into ``arcs`` (outgoing arcs),
            in the order edges were supplied.
        counters: One flow counter per input edge, in input order.
        forward: Index into ``arcs`` of each input edge's forward arc.
    """

    def __init__(self, node_ids: Sequence[Hashable]) -> None:
        # Repeated ids collapse onto their first occurrence
        self.node_ids: List[Hashable] = list(dict.fromkeys(node_ids))
        self.index: Dict[Hashable, int] = {
            node_id: handle for handle, node_id in enumerate(self.node_ids)
        }
        self.arcs: List[ResidualArc] = []
        self.adjacency: List[List[int]] = [[] for _ in self.node_ids]
        self.counters: List[FlowCounter] = []
        self.forward: List[int] = []

    @classmethod
    def from_edges(
        cls, node_ids: Sequence[Hashable], edges: Iterable
    ) -> "ResidualGraph":
        """Build the residual graph for ``edges``.

        Every endpoint is resolved before any arc is created, so a bad
        reference leaves nothing half-built.

        Args:
            node_ids: Node ids in input order.
            edges: Edge-like objects exposing ``id``, ``source``, ``target``
                and ``capacity``.

        Raises:
            InvalidReferenceError: If an edge endpoint is not in ``node_ids``.
        """
        graph = cls(node_ids)
        resolved = []
        for edge in edges:
            tail = graph.handle(edge.source, f"edge {edge.id!r} source")
            head = graph.handle(edge.target, f"edge {edge.id!r} target")
            resolved.append((tail, head, edge.capacity))

        for edge_index, (tail, head, capacity) in enumerate(resolved):
            graph.add_edge_pair(tail, head, capacity, edge_index)
        return graph

    def handle(self, node_id: Hashable, role: str) -> int:
        """Return the integer handle of ``node_id``.

        Raises:
            InvalidReferenceError: If the node is unknown.
        """
        try:
            return self.index[node_id]
        except (KeyError, TypeError):
            raise InvalidReferenceError(node_id, role) from None

    def add_edge_pair(
        self, tail: int, head: int, capacity: int, edge_index: int
    ) -> FlowCounter:
        """Append the forward and reverse arcs of one input edge."""
        counter = FlowCounter()
        self.counters.append(counter)

        self.forward.append(len(self.arcs))
        self.adjacency[tail].append(len(self.arcs))
        self.arcs.append(ResidualArc(tail, head, capacity, edge_index, counter, +1))

        self.adjacency[head].append(len(self.arcs))
        self.arcs.append(ResidualArc(head, tail, 0, edge_index, counter, -1))
        return counter

    def forward_arc(self, edge_index: int) -> ResidualArc:
        """Return the forward arc created for the input edge at ``edge_index``."""
        return self.arcs[self.forward[edge_index]]

    def out_arcs(self, handle: int) -> Iterable[ResidualArc]:
        """Yield outgoing arcs of a node in adjacency order."""
        arcs = self.arcs
        for arc_index in self.adjacency[handle]:
            yield arcs[arc_index]

    def edge_flows(self) -> List[int]:
        """Net flow per input edge, in input order."""
        return [counter.value for counter in self.counters]

    def __len__(self) -> int:
        return len(self.node_ids)
