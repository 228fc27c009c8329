"""Edge cases of the max-flow engine: bad references, degenerate requests,
non-positive capacities and input immutability."""

import copy
import logging

import pytest

from flowcut.algorithms.max_flow import calc_max_flow
from flowcut.config import EngineConfig
from flowcut.exceptions import FlowcutError, InvalidReferenceError
from flowcut.model.graph import Edge, Node
from flowcut.types import NodeRole
from tests.algorithms.sample_graphs import make_edges


class TestInvalidReferences:
    def test_unknown_source(self, line3):
        with pytest.raises(InvalidReferenceError) as exc_info:
            calc_max_flow(line3.nodes, line3.edges, "Z", "T")
        assert exc_info.value.reference == "Z"
        assert exc_info.value.role == "source"
        assert "Unknown node reference" in str(exc_info.value)

    def test_unknown_sink(self, line3):
        with pytest.raises(InvalidReferenceError) as exc_info:
            calc_max_flow(line3.nodes, line3.edges, "S", "Z")
        assert exc_info.value.role == "sink"

    def test_dangling_edge_endpoint(self):
        edges = [Edge("e1", "S", "T", 3), Edge("e2", "T", "Q", 1)]
        with pytest.raises(InvalidReferenceError) as exc_info:
            calc_max_flow(["S", "T"], edges, "S", "T")
        assert exc_info.value.reference == "Q"
        assert "e2" in exc_info.value.role

    def test_error_is_value_error_and_package_error(self):
        with pytest.raises(ValueError):
            calc_max_flow(["S"], [], "S", "T")
        with pytest.raises(FlowcutError):
            calc_max_flow(["S"], [], "S", "T")

    def test_unhashable_reference(self):
        with pytest.raises(InvalidReferenceError):
            calc_max_flow(["S", "T"], [], ["S"], "T")


class TestDegenerateRequest:
    def test_source_equals_sink(self, two_lanes):
        """
        Source == sink => zero flow, no paths; the node sits on the source side.
        """
        result = calc_max_flow(two_lanes.nodes, two_lanes.edges, "S", "S")
        assert result.max_flow == 0
        assert result.augmenting_paths == ()
        assert "S" in result.min_cut.source_set
        assert all(flow == 0 for flow in result.edge_flows.values())

    def test_source_equals_sink_logs_debug(self, single_edge, caplog):
        caplog.set_level(logging.DEBUG, logger="flowcut")
        calc_max_flow(single_edge.nodes, single_edge.edges, "T", "T")
        assert "Source and sink are the same node" in caplog.text


class TestCapacities:
    def test_zero_capacity_behaves_as_absent(self):
        edges = [Edge("z", "S", "T", 0)]
        result = calc_max_flow(["S", "T"], edges, "S", "T")
        assert result.max_flow == 0
        assert result.augmenting_paths == ()
        assert result.min_cut.edges == ()

    def test_negative_capacity_behaves_as_absent(self):
        edges = [Edge("neg", "S", "T", -4), Edge("ok", "S", "T", 2)]
        result = calc_max_flow(["S", "T"], edges, "S", "T")
        assert result.max_flow == 2
        assert result.edge_flows["neg"] == 0
        assert result.min_cut.edges == ("ok",)

    def test_self_loop_ignored(self):
        edges = [Edge("loop", "S", "S", 9), Edge("st", "S", "T", 1)]
        result = calc_max_flow(["S", "T"], edges, "S", "T")
        assert result.max_flow == 1
        assert result.edge_flows["loop"] == 0

    def test_large_capacities(self):
        big = 10**15
        edges = make_edges(("S", "A", big), ("A", "T", big - 1))
        result = calc_max_flow(["S", "A", "T"], edges, "S", "T")
        assert result.max_flow == big - 1


class TestPurity:
    def test_input_not_mutated(self, textbook6):
        nodes = list(textbook6.nodes)
        edges = copy.deepcopy(textbook6.edges)
        calc_max_flow(nodes, edges, "S", "T")
        assert nodes == textbook6.nodes
        assert edges == textbook6.edges
        assert all(e.flow == 0 for e in edges)

    def test_incoming_flow_ignored(self, single_edge):
        edges = [Edge("S->T", "S", "T", 5, flow=4)]
        result = calc_max_flow(single_edge.nodes, edges, "S", "T")
        assert result.max_flow == 5
        assert edges[0].flow == 4

    def test_repeated_calls_independent(self, textbook6):
        first = calc_max_flow(*textbook6)
        second = calc_max_flow(*textbook6)
        assert first.max_flow == second.max_flow == 23

    def test_accepts_node_objects(self, single_edge):
        nodes = [
            Node("S", "Source", NodeRole.SOURCE),
            Node("T", "Sink", NodeRole.SINK),
        ]
        result = calc_max_flow(nodes, single_edge.edges, "S", "T")
        assert result.max_flow == 5
        assert result.min_cut.source_set == ("S",)

    def test_role_field_not_trusted(self, single_edge):
        """
        The ids passed in decide the terminals, not the nodes' role fields.
        """
        nodes = [Node("S", "S", NodeRole.SINK), Node("T", "T", NodeRole.SOURCE)]
        assert calc_max_flow(nodes, single_edge.edges, "S", "T").max_flow == 5

    def test_generators_accepted(self, line3):
        result = calc_max_flow(
            (n for n in line3.nodes), (e for e in line3.edges), "S", "T"
        )
        assert result.max_flow == 3


class TestLogging:
    def test_paths_logged_at_debug(self, two_lanes, caplog):
        caplog.set_level(logging.DEBUG, logger="flowcut")
        calc_max_flow(*two_lanes)
        assert "Augmenting path #1: S -> A -> T (+10)" in caplog.text
        assert "Augmenting path #2: S -> B -> T (+10)" in caplog.text

    def test_path_logging_can_be_disabled(self, two_lanes, caplog):
        caplog.set_level(logging.DEBUG, logger="flowcut")
        calc_max_flow(*two_lanes, config=EngineConfig(log_augmenting_paths=False))
        assert "Augmenting path" not in caplog.text
        assert "Max flow 'S' -> 'T': 20" in caplog.text


def test_duplicate_node_ids_collapse():
    result = calc_max_flow(["S", "T", "S"], [Edge("e", "S", "T", 2)], "S", "T")
    assert result.max_flow == 2
    assert result.min_cut.source_set == ("S",)
    assert result.min_cut.sink_set == ("T",)
