# src/clustering/dendrogram.py - v1
"""Dendrogram cutting: flat partitions by height or by cluster count.

Traversals are iterative, so deep chain-shaped trees do not hit the
interpreter recursion limit. Partitions list clusters left to right.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from graphclust.clustering.models import ClusterNode
from graphclust.core.models import NodeId

logger = logging.getLogger(__name__)

Partition = list[frozenset[NodeId]]


def cut_at_height(root: ClusterNode, height: float) -> Partition:
    """Clusters obtained by cutting the tree at ``height``.

    A merge node is emitted whole when its height is at most ``height``;
    leaves are always emitted. Forest nodes are never emitted whole: each
    of their trees is cut independently.
    """
    if not root.members:
        return []

    clusters: Partition = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.trees is not None:
            stack.extend(reversed(node.trees))
            continue
        if node.height <= height or node.left is None or node.right is None:
            clusters.append(node.members)
        else:
            stack.append(node.right)
            stack.append(node.left)
    return clusters


def cut_for_k_clusters(root: ClusterNode, k: int) -> Partition:
    """Cut that yields ``k`` clusters, or the closest achievable cut.

    Binary search over heights [0, root.height]. When no height gives
    exactly ``k`` clusters, the result may hold fewer than ``k``.
    """
    if k <= 0:
        return []
    if k == 1:
        return [root.members]

    low = 0
    high = root.height
    while low < high:
        mid = (low + high) // 2
        clusters = cut_at_height(root, mid)
        if len(clusters) == k:
            return clusters
        if len(clusters) < k:
            high = mid
        else:
            low = mid + 1

    clusters = cut_at_height(root, low)
    logger.debug("No exact cut for k=%d; height %d gives %d clusters", k, low, len(clusters))
    return clusters


def partitions_by_height(root: ClusterNode) -> dict[int, Partition]:
    """Partition for every integer height from 0 to ``root.height``."""
    if not root.members:
        return {}
    return {h: cut_at_height(root, h) for h in range(root.height + 1)}


def iter_tree(root: ClusterNode) -> Iterator[ClusterNode]:
    """Pre-order walk over ``root`` and all its descendants."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
