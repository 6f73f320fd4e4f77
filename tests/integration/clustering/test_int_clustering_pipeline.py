# tests/integration/clustering/test_int_clustering_pipeline.py - v1
"""Integration tests for the clustering pipeline.

Covers: converters, loader, label propagation (all modes), quality,
agglomerative and modularity clustering, dendrogram cutting, export
and the facade, on NetworkX reference graphs.

Pure Python - no external services.
"""

from __future__ import annotations

import json

import networkx as nx
import pytest

from graphclust.api.facade import build_hierarchy, cut_hierarchy, detect_communities
from graphclust.clustering.dendrogram import cut_at_height, iter_tree
from graphclust.clustering.export import dendrogram_to_networkx, dendrogram_to_records
from graphclust.community.quality import partition_modularity
from graphclust.core.models import HierarchicalOptions, LabelPropagationOptions
from graphclust.graph.converters import from_networkx
from graphclust.graph.loader import load_graph


# ── Helpers ─────────────────────────────────────────────────────

def _assert_partition(clusters, nodes) -> None:
    assert frozenset().union(*clusters) == frozenset(nodes)
    assert sum(len(c) for c in clusters) == len(nodes)


def _assert_dendrogram(result, nodes) -> None:
    assert result.root.members == frozenset(nodes)
    for node in iter_tree(result.root):
        if node.kind == "merge":
            assert node.members == node.left.members | node.right.members
            assert node.height > max(node.left.height, node.right.height)
    for height, partition in result.clusters.items():
        assert partition == cut_at_height(result.root, height)
        _assert_partition(partition, nodes)


@pytest.fixture(scope="module")
def karate() -> dict:
    return from_networkx(nx.karate_club_graph())


@pytest.fixture(scope="module")
def twin_cliques() -> dict:
    return from_networkx(nx.disjoint_union(nx.complete_graph(5), nx.complete_graph(5)))


# ── Label propagation ───────────────────────────────────────────

class TestLabelPropagationPipeline:
    @pytest.mark.parametrize("seed", [1, 42, 777])
    def test_sync_on_karate(self, karate, seed):
        options = LabelPropagationOptions(random_seed=seed)
        first = detect_communities(karate, options=options)
        second = detect_communities(karate, options=options)
        assert first.communities == second.communities
        assert set(first.communities) == set(karate)
        assert first.iterations <= options.max_iterations
        labels = set(first.communities.values())
        assert labels == set(range(len(labels)))
        assert -0.5 <= partition_modularity(karate, first.communities) <= 1.0

    def test_async_on_karate(self, karate):
        result = detect_communities(karate, mode="async")
        assert set(result.communities) == set(karate)
        assert result.iterations <= 100

    def test_semi_on_karate_keeps_anchors(self, karate):
        result = detect_communities(karate, mode="semi", seed_labels={0: 0, 33: 1})
        assert result.communities[0] == 0
        assert result.communities[33] == 1
        assert set(result.communities) == set(karate)

    def test_disjoint_cliques_split(self, twin_cliques):
        result = detect_communities(twin_cliques)
        assert result.converged is True
        assert result.community_count == 2
        assert partition_modularity(twin_cliques, result.communities) == pytest.approx(0.5)


# ── Hierarchical clustering ─────────────────────────────────────

class TestHierarchyPipeline:
    @pytest.mark.parametrize("linkage", ["single", "complete", "average", "ward"])
    def test_distance_hierarchy_on_karate(self, karate, linkage):
        result = build_hierarchy(karate, options=HierarchicalOptions(linkage=linkage))
        assert len(result.dendrogram) == 2 * len(karate) - 1
        _assert_dendrogram(result, karate)

    def test_modularity_hierarchy_on_karate(self, karate):
        result = build_hierarchy(karate, method="modularity")
        assert len(result.dendrogram) == 2 * len(karate) - 1
        _assert_dendrogram(result, karate)
        for k in (1, 2, 3, 5):
            clusters = cut_hierarchy(result, k=k)
            _assert_partition(clusters, karate)
            assert len(clusters) <= k

    def test_forest_for_disjoint_cliques(self, twin_cliques):
        result = build_hierarchy(twin_cliques)
        assert result.root.kind == "forest"
        top = cut_at_height(result.root, result.root.height)
        assert sorted(len(c) for c in top) == [5, 5]
        assert top == [frozenset(range(5)), frozenset(range(5, 10))]
        _assert_dendrogram(result, twin_cliques)

    def test_export_matches_dendrogram(self, karate):
        result = build_hierarchy(karate, options=HierarchicalOptions(linkage="average"))
        records = dendrogram_to_records(result)
        tree = dendrogram_to_networkx(result)
        assert [r["id"] for r in records] == [n.id for n in result.dendrogram]
        assert nx.is_arborescence(tree)
        json.dumps(records)


# ── File boundary ───────────────────────────────────────────────

class TestLoaderPipeline:
    def test_node_link_file_matches_networkx(self, tmp_path):
        g = nx.karate_club_graph()
        doc = {
            "directed": False,
            "multigraph": False,
            "graph": {},
            "nodes": [{"id": n} for n in g.nodes],
            "links": [
                {"source": u, "target": v, "weight": d.get("weight", 1.0)}
                for u, v, d in g.edges(data=True)
            ],
        }
        path = tmp_path / "karate.json"
        path.write_text(json.dumps(doc), encoding="utf-8")
        assert load_graph(path) == from_networkx(g)

    def test_adjacency_file_end_to_end(self, tmp_path, bridged_triangles):
        path = tmp_path / "bridged.json"
        path.write_text(json.dumps(bridged_triangles), encoding="utf-8")
        graph = load_graph(path)
        result = build_hierarchy(graph, method="modularity")
        assert cut_hierarchy(result, k=2) == [
            frozenset({"a", "b", "c"}),
            frozenset({"d", "e", "f"}),
        ]
