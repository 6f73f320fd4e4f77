# src/clustering/linkage.py - v2
"""Linkage policies combining pairwise node distances into a cluster distance.

Every policy sees only the finite distances over cross pairs (u in A,
v in B). With no finite pair the clusters are infinitely far apart.

  single:   minimum
  complete: maximum
  average:  arithmetic mean
  ward:     mean * |A||B| / (|A| + |B|)  (simplified Ward)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Collection

from graphclust.clustering.distance import DistanceTable, hop_distance
from graphclust.core.models import NodeId

LinkageFunction = Callable[[list[float], int, int], float]


def single_linkage(values: list[float], size_a: int, size_b: int) -> float:
    return min(values)


def complete_linkage(values: list[float], size_a: int, size_b: int) -> float:
    return max(values)


def average_linkage(values: list[float], size_a: int, size_b: int) -> float:
    return sum(values) / len(values)


def ward_linkage(values: list[float], size_a: int, size_b: int) -> float:
    mean = sum(values) / len(values)
    return mean * (size_a * size_b) / (size_a + size_b)


LINKAGE_FUNCTIONS: dict[str, LinkageFunction] = {
    "single": single_linkage,
    "complete": complete_linkage,
    "average": average_linkage,
    "ward": ward_linkage,
}


def get_linkage(method: str) -> LinkageFunction:
    """Resolve a linkage name.

    Raises:
        ValueError: If ``method`` is not a known linkage.
    """
    try:
        return LINKAGE_FUNCTIONS[method]
    except KeyError:
        raise ValueError(
            f"Unknown linkage method: {method!r}. "
            f"Expected one of {sorted(LINKAGE_FUNCTIONS)}"
        ) from None


def cluster_distance(
    cluster_a: Collection[NodeId],
    cluster_b: Collection[NodeId],
    distances: DistanceTable,
    method: str = "single",
) -> float:
    """Distance between two member sets under the given linkage."""
    linkage = get_linkage(method)
    if not cluster_a or not cluster_b:
        return math.inf

    values: list[float] = []
    for u in cluster_a:
        for v in cluster_b:
            d = hop_distance(distances, u, v)
            if math.isfinite(d):
                values.append(d)

    if not values:
        return math.inf
    return linkage(values, len(cluster_a), len(cluster_b))
