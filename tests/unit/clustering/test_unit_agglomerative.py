# tests/unit/clustering/test_unit_agglomerative.py - v1
"""Tests for clustering/agglomerative.py - distance-based dendrograms."""

from __future__ import annotations

import math

import pytest

from graphclust.clustering.agglomerative import hierarchical_clustering
from graphclust.clustering.models import EMPTY_ROOT_ID, FOREST_ROOT_ID


def _assert_merge_invariants(result) -> None:
    for node in result.dendrogram:
        if node.kind == "merge":
            assert node.members == node.left.members | node.right.members
            assert node.height > node.left.height
            assert node.height > node.right.height


class TestHierarchicalClustering:
    def test_empty_graph(self):
        result = hierarchical_clustering({})
        assert result.root.id == EMPTY_ROOT_ID
        assert result.root.members == frozenset()
        assert result.root.height == 0
        assert result.dendrogram == []
        assert result.clusters == {}

    def test_single_node(self):
        result = hierarchical_clustering({"a": {}})
        assert result.root.id == "leaf-0"
        assert result.root.height == 0
        assert len(result.dendrogram) == 1
        assert result.clusters == {0: [frozenset({"a"})]}

    def test_chain_single_linkage(self, chain_graph):
        result = hierarchical_clustering(chain_graph, linkage="single")
        assert len(result.dendrogram) == 7
        assert [n.id for n in result.dendrogram] == [
            "leaf-0", "leaf-1", "leaf-2", "leaf-3",
            "cluster-4", "cluster-5", "cluster-6",
        ]
        assert result.dendrogram[4].members == {"a", "b"}
        assert result.dendrogram[5].members == {"c", "d"}
        assert result.root.id == "cluster-6"
        assert result.root.height == 2
        assert result.root.distance == 1

    def test_chain_partitions_by_height(self, chain_graph):
        result = hierarchical_clustering(chain_graph)
        assert len(result.clusters[0]) == 4
        assert result.clusters[1] == [frozenset({"a", "b"}), frozenset({"c", "d"})]
        assert result.clusters[2] == [frozenset({"a", "b", "c", "d"})]

    def test_chain_complete_linkage(self, chain_graph):
        result = hierarchical_clustering(chain_graph, linkage="complete")
        assert result.root.height == 2
        assert result.root.distance == 3

    def test_clique_complete_linkage(self, clique4):
        result = hierarchical_clustering(clique4, linkage="complete")
        assert result.root.distance == 1
        assert result.root.members == {"a", "b", "c", "d"}

    def test_ties_take_first_pair(self, clique4):
        result = hierarchical_clustering(clique4)
        assert result.dendrogram[4].members == {"a", "b"}

    def test_disconnected_graph_gets_forest_root(self, two_pairs):
        result = hierarchical_clustering(two_pairs)
        root = result.root
        assert root.id == FOREST_ROOT_ID
        assert root.kind == "forest"
        assert root.distance == math.inf
        assert root.height == 2
        assert root.members == {"a", "b", "c", "d"}
        assert result.dendrogram[-1] is root
        assert len(result.dendrogram) == 7
        assert result.clusters[2] == [frozenset({"a", "b"}), frozenset({"c", "d"})]

    def test_isolated_nodes(self):
        result = hierarchical_clustering({"a": {}, "b": {}})
        assert result.root.kind == "forest"
        assert result.root.height == 1
        assert len(result.root.trees) == 2

    @pytest.mark.parametrize("linkage", ["single", "complete", "average", "ward"])
    def test_merge_invariants(self, bridged_triangles, linkage):
        result = hierarchical_clustering(bridged_triangles, linkage=linkage)
        _assert_merge_invariants(result)
        assert result.root.members == frozenset(bridged_triangles)
        assert len(result.dendrogram) == 2 * len(bridged_triangles) - 1

    def test_ignores_unknown_neighbors(self):
        result = hierarchical_clustering({"a": {"b": 1, "ghost": 1}, "b": {"a": 1}})
        assert result.root.members == {"a", "b"}

    def test_unknown_linkage(self, chain_graph):
        with pytest.raises(ValueError):
            hierarchical_clustering(chain_graph, linkage="centroid")
