# src/clustering/agglomerative.py - v1
"""Agglomerative hierarchical clustering over hop-count distances.

Pure function: takes a weighted adjacency mapping, returns a
HierarchicalClusteringResult. Weights are ignored; distances are
shortest hop counts from compute_hop_distances.

Algorithm:
  1. One leaf per node, in graph iteration order.
  2. Seed a cluster distance table with the chosen linkage.
  3. Repeatedly merge the closest active pair (first pair in scan order
     wins ties) and recompute distances from the merged cluster.
  4. If every remaining pair is infinitely far apart, gather the active
     clusters under a synthetic forest root.
  5. Precompute the partition for every height up to the root's.

Naive O(n^3): intended for small and medium graphs.
"""

from __future__ import annotations

import logging
import math

from graphclust.clustering.dendrogram import partitions_by_height
from graphclust.clustering.distance import compute_hop_distances
from graphclust.clustering.linkage import cluster_distance, get_linkage
from graphclust.clustering.models import ClusterNode, HierarchicalClusteringResult
from graphclust.core.models import Graph

logger = logging.getLogger(__name__)


def hierarchical_clustering(
    graph: Graph,
    linkage: str = "single",
) -> HierarchicalClusteringResult:
    """Build a full dendrogram by repeatedly merging the closest clusters.

    Args:
        graph: Weighted adjacency mapping node -> {neighbor: weight}.
        linkage: One of "single", "complete", "average", "ward".

    Returns:
        HierarchicalClusteringResult. The dendrogram lists leaves first,
        then merge nodes (and the forest root, if any) in creation order.

    Raises:
        ValueError: If ``linkage`` is unknown.
    """
    get_linkage(linkage)
    nodes = list(graph)
    if not nodes:
        return HierarchicalClusteringResult.empty()

    distances = compute_hop_distances(graph)

    active = [ClusterNode.leaf(i, node) for i, node in enumerate(nodes)]
    dendrogram = list(active)
    next_id = len(nodes)

    table: dict[str, dict[str, float]] = {}
    for i, cluster_i in enumerate(active):
        row = table.setdefault(cluster_i.id, {})
        for cluster_j in active[i + 1:]:
            row[cluster_j.id] = cluster_distance(
                cluster_i.members, cluster_j.members, distances, linkage,
            )

    while len(active) > 1:
        pair = _closest_pair(active, table)
        if pair is None:
            logger.debug("No finite merge left among %d clusters", len(active))
            break

        i, j, dist = pair
        left, right = active[i], active[j]
        merged = ClusterNode.merge(f"cluster-{next_id}", left, right, dist)
        next_id += 1
        dendrogram.append(merged)

        _retire(table, left.id, right.id)
        table[merged.id] = {
            other.id: cluster_distance(merged.members, other.members, distances, linkage)
            for k, other in enumerate(active)
            if k != i and k != j
        }

        del active[j]
        del active[i]
        active.append(merged)
        logger.debug(
            "Merged %s + %s -> %s (distance=%s, size=%d)",
            left.id, right.id, merged.id, dist, merged.size,
        )

    if len(active) == 1:
        root = active[0]
    else:
        root = ClusterNode.forest(active)
        dendrogram.append(root)

    result = HierarchicalClusteringResult(
        root=root,
        dendrogram=dendrogram,
        clusters=partitions_by_height(root),
    )
    logger.info(
        "Hierarchical clustering (%s): %d nodes, %d dendrogram nodes, height %d",
        linkage, len(nodes), len(dendrogram), root.height,
    )
    return result


def _closest_pair(
    active: list[ClusterNode],
    table: dict[str, dict[str, float]],
) -> tuple[int, int, float] | None:
    """Indices (i < j) and distance of the closest finite pair, if any."""
    best = math.inf
    found: tuple[int, int, float] | None = None
    for i in range(len(active)):
        for j in range(i + 1, len(active)):
            dist = _lookup(table, active[i].id, active[j].id)
            if dist < best:
                best = dist
                found = (i, j, dist)
    return found


def _lookup(table: dict[str, dict[str, float]], a: str, b: str) -> float:
    dist = table.get(a, {}).get(b)
    if dist is None:
        dist = table.get(b, {}).get(a)
    return math.inf if dist is None else dist


def _retire(table: dict[str, dict[str, float]], *cluster_ids: str) -> None:
    """Drop every table entry that refers to the given clusters."""
    for cluster_id in cluster_ids:
        table.pop(cluster_id, None)
    for row in table.values():
        for cluster_id in cluster_ids:
            row.pop(cluster_id, None)
