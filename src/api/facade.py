# src/api/facade.py - v2
"""Public API facade: validated entry points to the clustering engines.

Usage:
    from graphclust.api.facade import detect_communities, build_hierarchy
    result = detect_communities(graph, mode="sync")
    tree = build_hierarchy(graph, method="distance")
    partition = cut_hierarchy(tree, k=3)

The engines are total functions and never validate their input. This
module checks graphs and options at the boundary, tags log records with
a run id and dispatches to the right engine.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from graphclust.clustering.agglomerative import hierarchical_clustering
from graphclust.clustering.dendrogram import Partition, cut_at_height, cut_for_k_clusters
from graphclust.clustering.models import ClusterNode, HierarchicalClusteringResult
from graphclust.clustering.modularity import modularity_hierarchical_clustering
from graphclust.community.label_propagation import (
    LabelPropagationResult,
    label_propagation,
    label_propagation_async,
    label_propagation_semi_supervised,
)
from graphclust.core.models import (
    Graph,
    HierarchicalOptions,
    LabelPropagationOptions,
    NodeId,
)
from graphclust.core.random_source import DeterministicRandomSource
from graphclust.graph.converters import GraphValidationError, validate_graph
from graphclust.logging.context import clear_context, set_algorithm_context, set_run_context

logger = logging.getLogger(__name__)

PROPAGATION_MODES = ("sync", "async", "semi")
HIERARCHY_METHODS = ("distance", "modularity")


def detect_communities(
    graph: Graph,
    mode: str = "sync",
    options: LabelPropagationOptions | None = None,
    seed_labels: Mapping[NodeId, int] | None = None,
    rng: DeterministicRandomSource | None = None,
) -> LabelPropagationResult:
    """Run label propagation on a validated graph.

    Args:
        graph: Weighted adjacency mapping node -> {neighbor: weight}.
        mode: "sync", "async" or "semi" (semi-supervised).
        options: Iteration budget and seed. Defaults apply if None.
        seed_labels: Fixed labels, required for mode "semi".
        rng: Caller-owned random source (ignored by mode "async").

    Raises:
        GraphValidationError: If the graph is malformed.
        ValueError: If the mode is unknown or seed labels are missing.
    """
    if mode not in PROPAGATION_MODES:
        raise ValueError(f"Unknown mode: {mode!r}. Expected one of {PROPAGATION_MODES}")
    if mode == "semi" and seed_labels is None:
        raise ValueError("Mode 'semi' requires seed_labels")

    validate_graph(graph)
    if seed_labels is not None:
        _validate_seed_labels(seed_labels)
    options = options or LabelPropagationOptions()

    run_id = _generate_run_id()
    set_run_context(run_id)
    set_algorithm_context("label_propagation", phase=mode)
    try:
        logger.info(
            "Detecting communities: run_id=%s, mode=%s, nodes=%d",
            run_id, mode, len(graph),
        )
        if mode == "async":
            return label_propagation_async(graph, max_iterations=options.max_iterations)
        if mode == "semi":
            return label_propagation_semi_supervised(
                graph,
                seed_labels or {},
                max_iterations=options.max_iterations,
                random_seed=options.random_seed,
                rng=rng,
            )
        return label_propagation(
            graph,
            max_iterations=options.max_iterations,
            random_seed=options.random_seed,
            rng=rng,
        )
    finally:
        clear_context()


def build_hierarchy(
    graph: Graph,
    method: str = "distance",
    options: HierarchicalOptions | None = None,
    max_nodes: int | None = None,
) -> HierarchicalClusteringResult:
    """Build a dendrogram on a validated graph.

    Args:
        graph: Weighted adjacency mapping node -> {neighbor: weight}.
        method: "distance" (linkage over hop counts) or "modularity".
        options: Linkage choice, used by method "distance".
        max_nodes: Refuse graphs larger than this (None = no limit).

    Raises:
        GraphValidationError: If the graph is malformed.
        ValueError: If the method is unknown or the graph is too large.
    """
    if method not in HIERARCHY_METHODS:
        raise ValueError(f"Unknown method: {method!r}. Expected one of {HIERARCHY_METHODS}")

    validate_graph(graph)
    if max_nodes is not None and len(graph) > max_nodes:
        raise ValueError(
            f"Graph has {len(graph)} nodes, above the limit of {max_nodes} "
            "for hierarchical clustering"
        )
    options = options or HierarchicalOptions()

    run_id = _generate_run_id()
    set_run_context(run_id)
    try:
        if method == "modularity":
            set_algorithm_context("modularity_clustering")
            logger.info("Building modularity hierarchy: run_id=%s, nodes=%d", run_id, len(graph))
            return modularity_hierarchical_clustering(graph)

        set_algorithm_context("hierarchical_clustering", phase=options.linkage)
        logger.info(
            "Building hierarchy: run_id=%s, linkage=%s, nodes=%d",
            run_id, options.linkage, len(graph),
        )
        return hierarchical_clustering(graph, linkage=options.linkage)
    finally:
        clear_context()


def cut_hierarchy(
    result: HierarchicalClusteringResult | ClusterNode,
    height: int | None = None,
    k: int | None = None,
) -> Partition:
    """Flat partition of a dendrogram, by height or by cluster count.

    Raises:
        ValueError: Unless exactly one of ``height`` and ``k`` is given.
    """
    if (height is None) == (k is None):
        raise ValueError("Provide exactly one of height or k")

    root = result.root if isinstance(result, HierarchicalClusteringResult) else result
    if k is not None:
        return cut_for_k_clusters(root, k)
    return cut_at_height(root, height)  # type: ignore[arg-type]


def _validate_seed_labels(seed_labels: Any) -> None:
    if not isinstance(seed_labels, Mapping):
        raise GraphValidationError("Seed labels must be a mapping of node -> int")
    for node, label in seed_labels.items():
        if isinstance(label, bool) or not isinstance(label, int):
            raise GraphValidationError(f"Seed label of {node!r} must be an integer")


def _generate_run_id() -> str:
    return uuid.uuid4().hex[:12]
