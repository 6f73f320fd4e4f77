# src/clustering/models.py - v1
"""Dendrogram models: ClusterNode and HierarchicalClusteringResult.

A ClusterNode is one of three shapes, reported by ``kind``:
  - "leaf": a single original node, no children.
  - "merge": exactly two children, ``left`` and ``right``.
  - "forest": synthetic root over disconnected trees, stored in ``trees``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

from graphclust.core.models import NodeId

ClusterKind = Literal["leaf", "merge", "forest"]

EMPTY_ROOT_ID = "empty"
FOREST_ROOT_ID = "root-forest"


@dataclass(eq=False)
class ClusterNode:
    """Node of a dendrogram. Compared and hashed by identity."""

    id: str
    members: frozenset[NodeId]
    distance: float = 0.0
    height: int = 0
    left: ClusterNode | None = None
    right: ClusterNode | None = None
    trees: list[ClusterNode] | None = None

    @property
    def kind(self) -> ClusterKind:
        if self.trees is not None:
            return "forest"
        if self.left is not None and self.right is not None:
            return "merge"
        return "leaf"

    @property
    def is_leaf(self) -> bool:
        return self.kind == "leaf"

    @property
    def children(self) -> list[ClusterNode]:
        if self.trees is not None:
            return list(self.trees)
        if self.left is not None and self.right is not None:
            return [self.left, self.right]
        return []

    @property
    def size(self) -> int:
        return len(self.members)

    @classmethod
    def leaf(cls, index: int, node: NodeId) -> ClusterNode:
        return cls(id=f"leaf-{index}", members=frozenset([node]))

    @classmethod
    def merge(
        cls, cluster_id: str, left: ClusterNode, right: ClusterNode, distance: float,
    ) -> ClusterNode:
        return cls(
            id=cluster_id,
            members=left.members | right.members,
            distance=distance,
            height=max(left.height, right.height) + 1,
            left=left,
            right=right,
        )

    @classmethod
    def forest(cls, trees: list[ClusterNode]) -> ClusterNode:
        members: frozenset[NodeId] = frozenset().union(*(t.members for t in trees))
        return cls(
            id=FOREST_ROOT_ID,
            members=members,
            distance=math.inf,
            height=max(t.height for t in trees) + 1,
            trees=list(trees),
        )


@dataclass
class HierarchicalClusteringResult:
    """Root, creation-ordered node list and per-height partitions."""

    root: ClusterNode
    dendrogram: list[ClusterNode] = field(default_factory=list)
    clusters: dict[int, list[frozenset[NodeId]]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> HierarchicalClusteringResult:
        return cls(root=ClusterNode(id=EMPTY_ROOT_ID, members=frozenset()))

    @property
    def leaves(self) -> list[ClusterNode]:
        return [node for node in self.dendrogram if node.is_leaf]
