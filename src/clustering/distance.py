# src/clustering/distance.py - v2
"""Hop-count distance oracle for the agglomerative clusterer.

Shortest paths are computed by NetworkX on a directed view of the
adjacency mapping, every edge at unit length. Weights are ignored and
no reverse edge is inferred. Unreachable pairs have no entry and read
as infinite through ``hop_distance``. Cost: O(V * (V + E)).
"""

from __future__ import annotations

import logging
import math

import networkx as nx

from graphclust.core.models import Graph, NodeId
from graphclust.graph.converters import to_networkx

logger = logging.getLogger(__name__)

DistanceTable = dict[NodeId, dict[NodeId, int]]


def compute_hop_distances(graph: Graph) -> DistanceTable:
    """All-pairs shortest hop counts between nodes of ``graph``.

    Neighbors outside the key set are not traversed.
    """
    nx_graph = to_networkx(graph, directed=True).subgraph(list(graph))
    distances: DistanceTable = {
        source: dict(lengths)
        for source, lengths in nx.all_pairs_shortest_path_length(nx_graph)
    }
    logger.debug("Computed hop distances for %d nodes", len(distances))
    return distances


def hop_distance(distances: DistanceTable, source: NodeId, target: NodeId) -> float:
    """Recorded distance from ``source`` to ``target``, or infinity."""
    return distances.get(source, {}).get(target, math.inf)
