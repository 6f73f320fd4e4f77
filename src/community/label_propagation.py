# src/community/label_propagation.py - v1
"""Community detection via label propagation (Raghavan et al., 2007).

Pure functions: take a weighted adjacency mapping, return a
LabelPropagationResult. The input graph is never modified.

Three update disciplines are provided:
  - label_propagation: shuffled visitation order, labels applied
    immediately, random tie-break among the heaviest labels.
  - label_propagation_async: every node reads the previous pass,
    labels applied as a batch, lowest label wins ties.
  - label_propagation_semi_supervised: seed nodes keep their label
    and only vote; other nodes update as in label_propagation.

Neighbors that are not keys of the graph are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from graphclust.core.models import Graph, NodeId
from graphclust.core.random_source import DeterministicRandomSource

logger = logging.getLogger(__name__)


@dataclass
class LabelPropagationResult:
    """Community assignment produced by one propagation run."""

    communities: dict[NodeId, int] = field(default_factory=dict)
    iterations: int = 0
    converged: bool = True

    @property
    def community_count(self) -> int:
        return len(set(self.communities.values()))

    def groups(self) -> dict[int, list[NodeId]]:
        """Community id -> member nodes, in node iteration order."""
        grouped: dict[int, list[NodeId]] = {}
        for node, label in self.communities.items():
            grouped.setdefault(label, []).append(node)
        return grouped


def label_propagation(
    graph: Graph,
    max_iterations: int = 100,
    random_seed: int = 42,
    rng: DeterministicRandomSource | None = None,
) -> LabelPropagationResult:
    """Synchronous label propagation with randomized order and tie-breaks.

    Args:
        graph: Weighted adjacency mapping node -> {neighbor: weight}.
        max_iterations: Upper bound on full passes over the nodes.
        random_seed: Seed for a fresh random source when ``rng`` is None.
        rng: Caller-owned random source; consumed in place when given.

    Returns:
        LabelPropagationResult with labels renumbered to [0, k).
    """
    if not graph:
        return LabelPropagationResult()

    rng = rng if rng is not None else DeterministicRandomSource(random_seed)
    nodes = list(graph)
    labels: dict[NodeId, int] = {node: i for i, node in enumerate(nodes)}

    iterations, converged = _propagate(graph, nodes, labels, max_iterations, rng)

    result = LabelPropagationResult(
        communities=_renumber(labels),
        iterations=iterations,
        converged=converged,
    )
    logger.info(
        "Label propagation: %d nodes, %d communities, %d passes (converged=%s)",
        len(nodes), result.community_count, iterations, converged,
    )
    return result


def label_propagation_async(
    graph: Graph,
    max_iterations: int = 100,
) -> LabelPropagationResult:
    """Batch-update label propagation with deterministic tie-breaking.

    All nodes are evaluated against the labels of the previous pass, in
    graph iteration order. On equal weight the smaller label wins, with
    the node's own label as the starting candidate.

    Returns:
        LabelPropagationResult with labels renumbered to [0, k).
    """
    if not graph:
        return LabelPropagationResult()

    nodes = list(graph)
    labels: dict[NodeId, int] = {node: i for i, node in enumerate(nodes)}

    iterations = 0
    converged = False
    while iterations < max_iterations and not converged:
        iterations += 1
        converged = True
        new_labels: dict[NodeId, int] = {}

        for node in nodes:
            current = labels[node]
            neighbors = graph.get(node)
            if not neighbors:
                new_labels[node] = current
                continue

            best = _lowest_heaviest_label(neighbors, labels, current)
            new_labels[node] = best
            if best != current:
                converged = False

        labels.update(new_labels)
        logger.debug("Async pass %d: converged=%s", iterations, converged)

    result = LabelPropagationResult(
        communities=_renumber(labels),
        iterations=iterations,
        converged=converged,
    )
    logger.info(
        "Async label propagation: %d nodes, %d communities, %d passes (converged=%s)",
        len(nodes), result.community_count, iterations, converged,
    )
    return result


def label_propagation_semi_supervised(
    graph: Graph,
    seed_labels: Mapping[NodeId, int],
    max_iterations: int = 100,
    random_seed: int = 42,
    rng: DeterministicRandomSource | None = None,
) -> LabelPropagationResult:
    """Label propagation anchored by immutable seed labels.

    Seed nodes take their given label and are never updated. Unlabeled
    nodes start with fresh labels above the largest seed label. Labels
    are returned verbatim, without renumbering.

    Args:
        graph: Weighted adjacency mapping node -> {neighbor: weight}.
        seed_labels: node -> fixed label. Entries for unknown nodes only
            raise the starting point of fresh labels.
        max_iterations: Upper bound on full passes.
        random_seed: Seed for a fresh random source when ``rng`` is None.
        rng: Caller-owned random source; consumed in place when given.
    """
    if not graph:
        return LabelPropagationResult()

    rng = rng if rng is not None else DeterministicRandomSource(random_seed)
    nodes = list(graph)

    next_label = max(seed_labels.values(), default=-1) + 1
    labels: dict[NodeId, int] = {}
    for node in nodes:
        if node in seed_labels:
            labels[node] = seed_labels[node]
        else:
            labels[node] = next_label
            next_label += 1

    free_nodes = [node for node in nodes if node not in seed_labels]
    iterations, converged = _propagate(graph, free_nodes, labels, max_iterations, rng)

    logger.info(
        "Semi-supervised propagation: %d nodes (%d seeded), %d passes (converged=%s)",
        len(nodes), len(nodes) - len(free_nodes), iterations, converged,
    )
    return LabelPropagationResult(
        communities=labels,
        iterations=iterations,
        converged=converged,
    )


# --- Internals ---


def _propagate(
    graph: Graph,
    update_nodes: list[NodeId],
    labels: dict[NodeId, int],
    max_iterations: int,
    rng: DeterministicRandomSource,
) -> tuple[int, bool]:
    """Run shuffled passes over ``update_nodes``, mutating ``labels``."""
    iterations = 0
    converged = False
    while iterations < max_iterations and not converged:
        iterations += 1
        converged = True
        changes = 0

        order = list(update_nodes)
        rng.shuffle(order)

        for node in order:
            neighbors = graph.get(node)
            if not neighbors:
                continue
            current = labels[node]
            chosen = _random_heaviest_label(neighbors, labels, current, rng)
            if chosen != current:
                labels[node] = chosen
                converged = False
                changes += 1

        logger.debug("Pass %d: %d label changes", iterations, changes)
    return iterations, converged


def _random_heaviest_label(
    neighbors: Mapping[NodeId, float],
    labels: Mapping[NodeId, int],
    current: int,
    rng: DeterministicRandomSource,
) -> int:
    """Pick uniformly among the labels with the largest accumulated weight.

    A label joins the candidate list each time its running total matches
    the running maximum, and the node's own label joins once more when it
    is tied at the end. Duplicates are intentional: they weight the draw.
    """
    counts: dict[int, float] = {}
    max_count: float = 0
    candidates: list[int] = []

    for neighbor, weight in neighbors.items():
        if neighbor not in labels:
            continue
        label = labels[neighbor]
        count = counts.get(label, 0) + weight
        counts[label] = count

        if count > max_count:
            max_count = count
            candidates = [label]
        elif count == max_count:
            candidates.append(label)

    if not candidates:
        return current

    if current in counts and counts[current] == max_count:
        candidates.append(current)

    return candidates[rng.next_index(len(candidates))]


def _lowest_heaviest_label(
    neighbors: Mapping[NodeId, float],
    labels: Mapping[NodeId, int],
    current: int,
) -> int:
    """Heaviest neighbor label, smallest id on ties, starting from ``current``."""
    counts: dict[int, float] = {}
    max_count: float = 0
    best = current

    for neighbor, weight in neighbors.items():
        if neighbor not in labels:
            continue
        label = labels[neighbor]
        count = counts.get(label, 0) + weight
        counts[label] = count

        if count > max_count or (count == max_count and label < best):
            max_count = count
            best = label

    return best


def _renumber(labels: Mapping[NodeId, int]) -> dict[NodeId, int]:
    """Map labels to [0, k) in order of first appearance."""
    dense = {label: i for i, label in enumerate(dict.fromkeys(labels.values()))}
    return {node: dense[label] for node, label in labels.items()}
