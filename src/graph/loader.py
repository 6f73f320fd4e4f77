# src/graph/loader.py - v2
"""Load graphs and seed labels from JSON files.

Two graph layouts are accepted:
  - NetworkX node-link documents (an object with "nodes" and
    "links" or "edges"), converted with from_networkx.
  - Plain adjacency objects: {node: {neighbor: weight}} or
    {node: [neighbor, ...]} with unit weights.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import networkx as nx

from graphclust.core.models import NodeId
from graphclust.graph.converters import GraphValidationError, from_networkx, validate_graph

logger = logging.getLogger(__name__)


def load_graph(path: str | Path) -> dict[NodeId, dict[NodeId, float]]:
    """Read and validate a graph file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        GraphValidationError: If the document is not a usable graph.
    """
    data = _read_json(path)
    graph = parse_graph(data)
    validate_graph(graph)
    logger.info("Loaded graph from %s: %d nodes", path, len(graph))
    return graph


def parse_graph(data: Any) -> dict[NodeId, dict[NodeId, float]]:
    """Convert a decoded JSON document into an adjacency mapping."""
    if not isinstance(data, dict):
        raise GraphValidationError(
            f"Graph document must be a JSON object, got {type(data).__name__}"
        )

    if "nodes" in data and ("links" in data or "edges" in data):
        edges_key = "links" if "links" in data else "edges"
        try:
            nx_graph = nx.node_link_graph(data, multigraph=False, edges=edges_key)
        except (KeyError, nx.NetworkXError) as exc:
            raise GraphValidationError(f"Invalid node-link document: {exc}") from exc
        return from_networkx(nx_graph)

    graph: dict[NodeId, dict[NodeId, float]] = {}
    for node, neighbors in data.items():
        if isinstance(neighbors, dict):
            graph[node] = dict(neighbors)
        elif isinstance(neighbors, list):
            graph[node] = {neighbor: 1.0 for neighbor in neighbors}
        else:
            raise GraphValidationError(
                f"Neighbors of {node!r} must be an object or a list, "
                f"got {type(neighbors).__name__}"
            )
    return graph


def load_seed_labels(path: str | Path) -> dict[NodeId, int]:
    """Read a {node: label} JSON object of integer seed labels."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise GraphValidationError("Seed labels must be a JSON object")

    seeds: dict[NodeId, int] = {}
    for node, label in data.items():
        if isinstance(label, bool) or not isinstance(label, int):
            raise GraphValidationError(f"Seed label of {node!r} must be an integer")
        seeds[node] = label
    return seeds


def _read_json(path: str | Path) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise GraphValidationError(f"Invalid JSON in {file_path}: {exc}") from exc
