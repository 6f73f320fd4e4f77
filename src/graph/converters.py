# src/graph/converters.py - v1
"""Conversions between NetworkX graphs, edge lists and adjacency mappings.

The engines consume a plain mapping node -> {neighbor: weight}. These
helpers build that mapping from the representations callers usually
hold, and validate it before it enters an engine.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from numbers import Real
from typing import Any

import networkx as nx

from graphclust.core.models import Graph, NodeId

logger = logging.getLogger(__name__)


class GraphValidationError(ValueError):
    """Raised when an adjacency mapping cannot be fed to the engines."""


def from_networkx(
    graph: nx.Graph,
    weight: str = "weight",
    default_weight: float = 1.0,
) -> dict[NodeId, dict[NodeId, float]]:
    """Build an adjacency mapping from a NetworkX graph.

    Undirected graphs produce symmetric entries; directed graphs keep
    out-edges only. Node order follows ``graph.nodes``.

    Args:
        graph: Any NetworkX Graph or DiGraph.
        weight: Edge attribute holding the weight.
        default_weight: Weight for edges without that attribute.
    """
    adjacency: dict[NodeId, dict[NodeId, float]] = {node: {} for node in graph.nodes}
    for u, v, data in graph.edges(data=True):
        w = data.get(weight, default_weight)
        adjacency[u][v] = w
        if not graph.is_directed():
            adjacency[v][u] = w
    return adjacency


def from_edge_list(
    edges: Iterable[tuple[Any, ...]],
    nodes: Iterable[NodeId] = (),
    directed: bool = False,
    default_weight: float = 1.0,
) -> dict[NodeId, dict[NodeId, float]]:
    """Build an adjacency mapping from ``(u, v)`` or ``(u, v, w)`` tuples.

    Nodes listed in ``nodes`` come first (isolated nodes included), then
    endpoints in order of first appearance. A repeated edge keeps its last
    weight.
    """
    adjacency: dict[NodeId, dict[NodeId, float]] = {node: {} for node in nodes}
    for edge in edges:
        if len(edge) == 2:
            u, v = edge
            w = default_weight
        elif len(edge) == 3:
            u, v, w = edge
        else:
            raise GraphValidationError(f"Edge must have 2 or 3 items, got {edge!r}")
        adjacency.setdefault(u, {})[v] = w
        target = adjacency.setdefault(v, {})
        if not directed:
            target[u] = w
    return adjacency


def to_networkx(graph: Graph, directed: bool = False) -> nx.Graph:
    """Build a NetworkX graph carrying weights in the ``weight`` attribute."""
    result: nx.Graph = nx.DiGraph() if directed else nx.Graph()
    result.add_nodes_from(graph)
    for node, neighbors in graph.items():
        for neighbor, w in neighbors.items():
            result.add_edge(node, neighbor, weight=w)
    return result


def validate_graph(graph: Any) -> None:
    """Check that ``graph`` is a mapping of mappings with non-negative weights.

    Neighbors absent from the key set are allowed; the engines skip them.

    Raises:
        GraphValidationError: On the first structural or weight problem.
    """
    if not isinstance(graph, Mapping):
        raise GraphValidationError(
            f"Graph must be a mapping, got {type(graph).__name__}"
        )
    for node, neighbors in graph.items():
        if not isinstance(neighbors, Mapping):
            raise GraphValidationError(
                f"Neighbors of {node!r} must be a mapping, got {type(neighbors).__name__}"
            )
        for neighbor, w in neighbors.items():
            if isinstance(w, bool) or not isinstance(w, Real):
                raise GraphValidationError(
                    f"Weight of edge {node!r} -> {neighbor!r} is not a number: {w!r}"
                )
            if math.isnan(w):
                raise GraphValidationError(f"Weight of edge {node!r} -> {neighbor!r} is NaN")
            if w < 0:
                raise GraphValidationError(
                    f"Weight of edge {node!r} -> {neighbor!r} is negative: {w!r}"
                )
    logger.debug("Validated graph with %d nodes", len(graph))
