"""Editable flow-network model: Node, Edge and GraphState.

``GraphState`` is the bookkeeping layer in front of the max-flow engine. It
keeps nodes and edges in insertion order, assigns the source and sink roles,
and rejects edits the engine relies on its caller to prevent (duplicate
labels, duplicate or self-loop edges, non-positive capacities). After
``compute()`` the latest ``FlowResult`` is kept so edges can be displayed with
their flow, cut and path membership.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from flowcut.algorithms.max_flow import calc_max_flow
from flowcut.exceptions import GraphEditError
from flowcut.logging import get_logger
from flowcut.types import FlowResult, NodeRole

LOGGER = get_logger(__name__)


@dataclass
class Node:
    """A node of the flow network.

    Attributes:
        id (str): Unique identifier used by edges and results.
        label (str): Display name; unique within a ``GraphState``.
        role (NodeRole): Source, sink or regular.
        x (float): Horizontal position for drawing.
        y (float): Vertical position for drawing.
    """

    id: str
    label: str
    role: NodeRole = NodeRole.REGULAR
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "role": self.role.label,
            "x": self.x,
            "y": self.y,
        }


@dataclass
class Edge:
    """One directed, capacitated edge.

    Attributes:
        id (str): Unique identifier.
        source (str): Id of the tail node.
        target (str): Id of the head node.
        capacity (int): Positive integer capacity.
        flow (int): Flow from the last computation; ignored as engine input.
    """

    id: str
    source: str
    target: str
    capacity: int
    flow: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "capacity": self.capacity,
            "flow": self.flow,
        }


@dataclass(frozen=True)
class EdgeView:
    """Edge annotated with the outcome of the last computation."""

    edge: Edge
    flow: int
    in_cut: bool
    in_path: bool


def _check_capacity(capacity: Any) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise GraphEditError(f"Capacity must be an integer, got {capacity!r}.")
    if capacity <= 0:
        raise GraphEditError(f"Capacity must be positive, got {capacity}.")
    return capacity


class GraphState:
    """Ordered collection of nodes and edges with source/sink designation.

    Node and edge ids are generated from monotonically increasing counters
    (``n0``, ``n1``, ... and ``e0``, ``e1``, ...); removed ids are not reused.
    Explicit ids may be passed when loading graphs from files.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._next_node_id = 0
        self._next_edge_id = 0
        self.result: Optional[FlowResult] = None

    #
    # Read access
    #
    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    @property
    def source(self) -> Optional[Node]:
        return self._node_with_role(NodeRole.SOURCE)

    @property
    def sink(self) -> Optional[Node]:
        return self._node_with_role(NodeRole.SINK)

    def _node_with_role(self, role: NodeRole) -> Optional[Node]:
        for node in self._nodes.values():
            if node.role == role:
                return node
        return None

    def get_node(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise GraphEditError(f"Node '{node_id}' does not exist.") from None

    def get_edge(self, edge_id: str) -> Edge:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise GraphEditError(f"Edge '{edge_id}' does not exist.") from None

    def node_by_label(self, label: str) -> Optional[Node]:
        for node in self._nodes.values():
            if node.label == label:
                return node
        return None

    def label_of(self, node_id: Any) -> str:
        """Return the display label of a node id, or the id itself if unknown."""
        node = self._nodes.get(node_id)
        return node.label if node is not None else str(node_id)

    #
    # Node editing
    #
    def add_node(
        self,
        label: Optional[str] = None,
        x: float = 0.0,
        y: float = 0.0,
        *,
        node_id: Optional[str] = None,
    ) -> Node:
        """Add a regular node.

        Without a label the node takes the first unused letter A-Z, then
        ``N<k>`` where ``k`` is the next node counter value.

        Raises:
            GraphEditError: If the label is empty or taken, or the id exists.
        """
        if label is None:
            label = self._auto_label()
        label = label.strip() if isinstance(label, str) else label
        if not label:
            raise GraphEditError("Node label must be a non-empty string.")
        if self.node_by_label(label) is not None:
            raise GraphEditError(f'Node "{label}" already exists.')

        if node_id is None:
            node_id = self._new_node_id()
        elif node_id in self._nodes:
            raise GraphEditError(f"Node id '{node_id}' already exists.")

        node = Node(id=node_id, label=label, x=x, y=y)
        self._nodes[node_id] = node
        self._invalidate()
        LOGGER.debug('Node "%s" added as %s', label, node_id)
        return node

    def remove_node(self, node_id: str) -> None:
        """Remove a node together with every edge touching it."""
        node = self.get_node(node_id)
        for edge_id in [
            e.id for e in self._edges.values() if node_id in (e.source, e.target)
        ]:
            del self._edges[edge_id]
        del self._nodes[node_id]
        self._invalidate()
        LOGGER.debug('Node "%s" removed', node.label)

    def move_node(self, node_id: str, x: float, y: float) -> None:
        node = self.get_node(node_id)
        node.x = x
        node.y = y

    def set_source(self, node_id: str) -> None:
        """Make ``node_id`` the source, demoting any previous source."""
        self._assign_role(node_id, NodeRole.SOURCE)

    def set_sink(self, node_id: str) -> None:
        """Make ``node_id`` the sink, demoting any previous sink."""
        self._assign_role(node_id, NodeRole.SINK)

    def clear_role(self, node_id: str) -> None:
        self.get_node(node_id).role = NodeRole.REGULAR
        self._invalidate()

    def _assign_role(self, node_id: str, role: NodeRole) -> None:
        node = self.get_node(node_id)
        for other in self._nodes.values():
            if other.role == role:
                other.role = NodeRole.REGULAR
        node.role = role
        self._invalidate()
        LOGGER.debug('Node "%s" set as %s', node.label, role.label)

    #
    # Edge editing
    #
    def add_edge(
        self,
        source_id: str,
        target_id: str,
        capacity: int,
        *,
        edge_id: Optional[str] = None,
    ) -> Edge:
        """Add a directed edge.

        Raises:
            GraphEditError: On unknown endpoints, self-loops, a second edge
                between the same ordered pair, or a non-positive capacity.
        """
        source = self.get_node(source_id)
        target = self.get_node(target_id)
        if source_id == target_id:
            raise GraphEditError("Self-loop edges are not allowed.")
        if any(
            e.source == source_id and e.target == target_id
            for e in self._edges.values()
        ):
            raise GraphEditError("Edge already exists.")
        capacity = _check_capacity(capacity)

        if edge_id is None:
            edge_id = self._new_edge_id()
        elif edge_id in self._edges:
            raise GraphEditError(f"Edge id '{edge_id}' already exists.")

        edge = Edge(id=edge_id, source=source_id, target=target_id, capacity=capacity)
        self._edges[edge_id] = edge
        self._invalidate()
        LOGGER.debug(
            "Edge %s -> %s (%d) added", source.label, target.label, capacity
        )
        return edge

    def remove_edge(self, edge_id: str) -> None:
        self.get_edge(edge_id)
        del self._edges[edge_id]
        self._invalidate()

    def set_capacity(self, edge_id: str, capacity: int) -> None:
        self.get_edge(edge_id).capacity = _check_capacity(capacity)
        self._invalidate()

    def clear(self) -> None:
        """Remove every node and edge."""
        self._nodes.clear()
        self._edges.clear()
        self._next_node_id = 0
        self._next_edge_id = 0
        self.result = None
        LOGGER.debug("Graph reset")

    def _auto_label(self) -> str:
        taken = {node.label for node in self._nodes.values()}
        for letter in string.ascii_uppercase:
            if letter not in taken:
                return letter
        return f"N{self._next_node_id}"

    def _new_node_id(self) -> str:
        while True:
            candidate = f"n{self._next_node_id}"
            self._next_node_id += 1
            if candidate not in self._nodes:
                return candidate

    def _new_edge_id(self) -> str:
        while True:
            candidate = f"e{self._next_edge_id}"
            self._next_edge_id += 1
            if candidate not in self._edges:
                return candidate

    def _invalidate(self) -> None:
        """Forget the previous result after any structural edit."""
        if self.result is not None:
            self.result = None
            for edge in self._edges.values():
                edge.flow = 0

    #
    # Computation
    #
    def compute(self) -> FlowResult:
        """Run the max-flow engine on the current graph.

        Edge ``flow`` attributes are updated with the final flows.

        Raises:
            GraphEditError: If the source or the sink is not set.
        """
        source, sink = self.source, self.sink
        if source is None or sink is None:
            raise GraphEditError("Please set both source and sink nodes.")

        for edge in self._edges.values():
            edge.flow = 0
        result = calc_max_flow(self.nodes, self.edges, source.id, sink.id)
        for edge in self._edges.values():
            edge.flow = result.edge_flows.get(edge.id, 0)
        self.result = result
        LOGGER.info("Maximum flow: %d", result.max_flow)
        return result

    def annotated_edges(self) -> List[EdgeView]:
        """Return every edge with flow, cut and path flags from the last result."""
        if self.result is None:
            return [EdgeView(e, 0, False, False) for e in self._edges.values()]
        cut = set(self.result.min_cut.edges)
        used = self.result.path_edges()
        return [
            EdgeView(
                edge=e,
                flow=self.result.edge_flows.get(e.id, 0),
                in_cut=e.id in cut,
                in_path=e.id in used,
            )
            for e in self._edges.values()
        ]

    #
    # Serialization
    #
    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        source, sink = self.source, self.sink
        return {
            "nodes": [n.to_dict() for n in self._nodes.values()],
            "edges": [
                {k: v for k, v in e.to_dict().items() if k != "flow"}
                for e in self._edges.values()
            ],
            "source": source.id if source else None,
            "sink": sink.id if sink else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphState":
        """Rebuild a graph from ``to_dict()`` output or a loaded graph file.

        Edge endpoints and ``source``/``sink`` may name a node by id or label.
        """
        state = cls()
        for entry in data.get("nodes", []):
            state.add_node(
                entry.get("label", entry["id"]),
                entry.get("x", 0.0),
                entry.get("y", 0.0),
                node_id=entry["id"],
            )
            role = entry.get("role")
            if role:
                role = NodeRole.from_string(role)
                if role != NodeRole.REGULAR:
                    state._assign_role(entry["id"], role)

        for entry in data.get("edges", []):
            state.add_edge(
                state.resolve(entry["source"]),
                state.resolve(entry["target"]),
                entry["capacity"],
                edge_id=entry.get("id"),
            )

        if data.get("source") is not None:
            state.set_source(state.resolve(data["source"]))
        if data.get("sink") is not None:
            state.set_sink(state.resolve(data["sink"]))
        return state

    def resolve(self, ref: str) -> str:
        """Map a node id or label to a node id."""
        if ref in self._nodes:
            return ref
        node = self.node_by_label(ref)
        if node is None:
            raise GraphEditError(f"Node '{ref}' does not exist.")
        return node.id

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"GraphState(nodes={len(self._nodes)}, edges={len(self._edges)})"
