# src/clustering/export.py - v1
"""Serializable views of dendrograms and partitions.

Records are flat (children referenced by id) so arbitrarily deep trees
serialize without nesting limits.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

import networkx as nx

from graphclust.clustering.models import ClusterNode, HierarchicalClusteringResult
from graphclust.core.models import NodeId


def _sorted_members(members: Iterable[NodeId]) -> list[NodeId]:
    return sorted(members, key=str)


def node_record(node: ClusterNode) -> dict[str, Any]:
    """JSON-safe record of a single cluster node."""
    return {
        "id": node.id,
        "kind": node.kind,
        "height": node.height,
        "distance": None if math.isinf(node.distance) else node.distance,
        "members": _sorted_members(node.members),
        "children": [child.id for child in node.children],
    }


def dendrogram_to_records(result: HierarchicalClusteringResult) -> list[dict[str, Any]]:
    """One record per dendrogram node, in creation order."""
    return [node_record(node) for node in result.dendrogram]


def dendrogram_to_networkx(result: HierarchicalClusteringResult) -> nx.DiGraph:
    """Tree as a DiGraph with parent -> child edges, keyed by cluster id."""
    tree = nx.DiGraph()
    for node in result.dendrogram:
        tree.add_node(
            node.id,
            kind=node.kind,
            height=node.height,
            distance=node.distance,
            size=node.size,
        )
        for child in node.children:
            tree.add_edge(node.id, child.id)
    return tree


def partition_to_lists(partition: Iterable[frozenset[NodeId]]) -> list[list[NodeId]]:
    """Member lists sorted by string form, clusters kept in order."""
    return [_sorted_members(cluster) for cluster in partition]
