# tests/unit/clustering/test_unit_linkage.py - v1
"""Tests for clustering/linkage.py - linkage policies."""

from __future__ import annotations

import math

import pytest

from graphclust.clustering.distance import compute_hop_distances
from graphclust.clustering.linkage import (
    LINKAGE_FUNCTIONS,
    average_linkage,
    cluster_distance,
    complete_linkage,
    get_linkage,
    single_linkage,
    ward_linkage,
)


class TestLinkageFunctions:
    def test_single(self):
        assert single_linkage([3, 1, 2], 1, 2) == 1

    def test_complete(self):
        assert complete_linkage([3, 1, 2], 1, 2) == 3

    def test_average(self):
        assert average_linkage([3, 1, 2], 1, 2) == 2

    def test_ward_scales_mean(self):
        assert ward_linkage([3, 1, 2], 1, 2) == pytest.approx(4 / 3)

    def test_registry(self):
        assert set(LINKAGE_FUNCTIONS) == {"single", "complete", "average", "ward"}


class TestGetLinkage:
    def test_known(self):
        assert get_linkage("average") is average_linkage

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown linkage"):
            get_linkage("centroid")


class TestClusterDistance:
    @pytest.mark.parametrize("method,expected", [
        ("single", 1),
        ("complete", 3),
        ("average", 2),
        ("ward", 2),
    ])
    def test_chain_halves(self, chain_graph, method, expected):
        distances = compute_hop_distances(chain_graph)
        assert cluster_distance({"a", "b"}, {"c", "d"}, distances, method) == expected

    def test_disconnected_is_infinite(self, two_pairs):
        distances = compute_hop_distances(two_pairs)
        assert cluster_distance({"a"}, {"c"}, distances) == math.inf

    def test_only_finite_pairs_count(self, two_pairs):
        distances = compute_hop_distances(two_pairs)
        assert cluster_distance({"a"}, {"b", "c"}, distances, "complete") == 1

    def test_missing_rows_read_as_infinite(self):
        distances = {"a": {"a": 0, "b": 2}}
        assert cluster_distance({"a", "c"}, {"b"}, distances, "complete") == 2
        assert cluster_distance({"c"}, {"a"}, distances) == math.inf

    def test_empty_cluster(self, chain_graph):
        distances = compute_hop_distances(chain_graph)
        assert cluster_distance(set(), {"a"}, distances) == math.inf

    def test_unknown_method(self, chain_graph):
        with pytest.raises(ValueError):
            cluster_distance({"a"}, {"b"}, {}, "median")
