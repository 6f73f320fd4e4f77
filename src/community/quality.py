# src/community/quality.py - v1
"""Partition quality for label assignments.

Newman modularity is delegated to NetworkX; this module only turns a
node -> label mapping into the partition NetworkX expects.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import networkx as nx

from graphclust.core.models import Graph, NodeId
from graphclust.graph.converters import to_networkx

logger = logging.getLogger(__name__)


def communities_from_labels(labels: Mapping[NodeId, int]) -> list[set[NodeId]]:
    """Group nodes by label, in order of first label appearance."""
    grouped: dict[int, set[NodeId]] = {}
    for node, label in labels.items():
        grouped.setdefault(label, set()).add(node)
    return list(grouped.values())


def partition_modularity(graph: Graph, labels: Mapping[NodeId, int]) -> float:
    """Weighted modularity of the partition induced by ``labels``.

    Edges to nodes outside the graph's key set are dropped. Nodes without
    a label count as singleton communities. Empty or weightless graphs
    score 0.0.
    """
    if not graph:
        return 0.0

    nx_graph = to_networkx(graph).subgraph(list(graph)).copy()
    if nx_graph.size(weight="weight") == 0:
        return 0.0

    known = {node: label for node, label in labels.items() if node in nx_graph}
    partition = communities_from_labels(known)
    partition.extend({node} for node in nx_graph if node not in known)

    score = nx.algorithms.community.modularity(nx_graph, partition, weight="weight")
    logger.debug("Modularity of %d communities: %.4f", len(partition), score)
    return float(score)
