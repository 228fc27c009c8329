"""YAML loader + schema validation for graph files.

A graph file lists nodes, edges and optionally the source and sink::

    nodes: [S, A, T]
    edges:
      - {source: S, target: A, capacity: 3}
      - {source: A, target: T, capacity: 2}
    source: S
    sink: T

A node entry is either a bare id (the id doubles as the label) or a mapping
with ``id`` and optional ``label``, ``role``, ``x`` and ``y``. Edge endpoints,
``source`` and ``sink`` may name nodes by id or by label.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
import yaml

from flowcut.logging import get_logger
from flowcut.model.graph import GraphState
from flowcut.utils.yaml_utils import normalize_yaml_id

logger = get_logger(__name__)


def _load_schema() -> Dict[str, Any]:
    schema_file = resources.files("flowcut.schemas").joinpath("graph.json")
    with schema_file.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_graph_dict(yaml_str: str) -> Dict[str, Any]:
    """Parse and validate a graph YAML string into canonical ``GraphState`` input.

    Returns a dictionary in ``GraphState.to_dict()`` shape: node entries are
    mappings with string ``id`` and ``label``; edge endpoints are strings.

    Raises:
        ValueError: If the document is not a mapping.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    jsonschema.validate(data, _load_schema())

    nodes = []
    for entry in data.get("nodes", []):
        if isinstance(entry, dict):
            node = dict(entry)
            node["id"] = normalize_yaml_id(entry["id"])
            node["label"] = normalize_yaml_id(entry.get("label", entry["id"]))
        else:
            node_id = normalize_yaml_id(entry)
            node = {"id": node_id, "label": node_id}
        nodes.append(node)

    edges = []
    for entry in data.get("edges", []):
        edge = dict(entry)
        edge["source"] = normalize_yaml_id(entry["source"])
        edge["target"] = normalize_yaml_id(entry["target"])
        if "id" in entry:
            edge["id"] = normalize_yaml_id(entry["id"])
        edges.append(edge)

    canonical: Dict[str, Any] = {"nodes": nodes, "edges": edges}
    for key in ("source", "sink"):
        value = data.get(key)
        canonical[key] = normalize_yaml_id(value) if value is not None else None
    return canonical


def load_graph_yaml(yaml_str: str) -> GraphState:
    """Build a ``GraphState`` from a graph YAML string.

    Raises:
        ValueError: On malformed documents (including ``GraphEditError`` for
            duplicate labels/edges, self-loops or bad capacities).
        jsonschema.ValidationError: If the document does not match the schema.
    """
    state = GraphState.from_dict(load_graph_dict(yaml_str))
    logger.debug(
        "Loaded graph with %d nodes, %d edges", len(state.nodes), len(state.edges)
    )
    return state


def load_graph_file(path: Union[str, Path]) -> GraphState:
    """Read and parse a graph YAML file."""
    path = Path(path)
    logger.debug("Loading graph from: %s", path)
    return load_graph_yaml(path.read_text(encoding="utf-8"))


def dump_graph_yaml(state: GraphState) -> str:
    """Serialize a ``GraphState`` to YAML that ``load_graph_yaml`` accepts."""
    return yaml.safe_dump(state.to_dict(), sort_keys=False)
