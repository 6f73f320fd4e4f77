# src/main.py - v2
"""CLI entry point: propagate, hierarchy, modularity commands.

Usage:
    graphclust propagate <graph.json> [options]
    graphclust hierarchy <graph.json> [--linkage L] [--height H | --k K]
    graphclust modularity <graph.json> [--height H | --k K]

Results are printed to stdout as JSON. Defaults come from Settings (.env).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from graphclust.config.settings import ConfigurationError, Settings, load_settings
from graphclust.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    _setup_logging(args.verbose, settings)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="graphclust",
        description=f"graphclust v{__version__} - community detection and hierarchical clustering",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- propagate ---
    p_propagate = subparsers.add_parser(
        "propagate", help="Assign communities by label propagation",
    )
    p_propagate.add_argument("graph", type=Path, help="Path to graph JSON")
    p_propagate.add_argument(
        "--mode", choices=["sync", "async", "semi"], default=None,
        help="Update discipline (default: LP_MODE setting)",
    )
    p_propagate.add_argument(
        "--seeds", type=Path, default=None,
        help="JSON object of fixed seed labels (required for --mode semi)",
    )
    p_propagate.add_argument(
        "--max-iterations", type=int, default=None,
        help="Maximum passes, 1-500 (default: LP_MAX_ITERATIONS setting)",
    )
    p_propagate.add_argument(
        "--random-seed", type=int, default=None,
        help="Seed of the deterministic random source (default: LP_RANDOM_SEED setting)",
    )
    p_propagate.set_defaults(func=_cmd_propagate)

    # --- hierarchy ---
    p_hierarchy = subparsers.add_parser(
        "hierarchy", help="Agglomerative clustering over hop distances",
    )
    p_hierarchy.add_argument("graph", type=Path, help="Path to graph JSON")
    p_hierarchy.add_argument(
        "--linkage", choices=["single", "complete", "average", "ward"], default=None,
        help="Linkage method (default: HIERARCHICAL_LINKAGE setting)",
    )
    _add_cut_arguments(p_hierarchy)
    p_hierarchy.set_defaults(func=_cmd_hierarchy)

    # --- modularity ---
    p_modularity = subparsers.add_parser(
        "modularity", help="Agglomerative clustering by modularity gain",
    )
    p_modularity.add_argument("graph", type=Path, help="Path to graph JSON")
    _add_cut_arguments(p_modularity)
    p_modularity.set_defaults(func=_cmd_modularity)

    return parser


def _add_cut_arguments(subparser: argparse.ArgumentParser) -> None:
    cut = subparser.add_mutually_exclusive_group()
    cut.add_argument(
        "--height", type=int, default=None,
        help="Report only the partition at this dendrogram height",
    )
    cut.add_argument(
        "--k", type=int, default=None,
        help="Report only the partition closest to k clusters",
    )


def _cmd_propagate(args: argparse.Namespace, settings: Settings) -> int:
    """Execute label propagation on a graph file."""
    from graphclust.api.facade import detect_communities
    from graphclust.community.quality import partition_modularity
    from graphclust.core.models import LabelPropagationOptions
    from graphclust.graph.loader import load_graph, load_seed_labels

    mode = args.mode or settings.lp_mode
    if mode == "semi" and args.seeds is None:
        logger.error("--mode semi requires --seeds")
        return 1

    options = LabelPropagationOptions(
        max_iterations=(
            args.max_iterations if args.max_iterations is not None
            else settings.lp_max_iterations
        ),
        random_seed=(
            args.random_seed if args.random_seed is not None
            else settings.lp_random_seed
        ),
    )

    graph = load_graph(args.graph)
    seeds = load_seed_labels(args.seeds) if args.seeds is not None else None

    result = detect_communities(graph, mode=mode, options=options, seed_labels=seeds)
    _print_json({
        "communities": result.communities,
        "community_count": result.community_count,
        "iterations": result.iterations,
        "converged": result.converged,
        "modularity": partition_modularity(graph, result.communities),
    })
    return 0


def _cmd_hierarchy(args: argparse.Namespace, settings: Settings) -> int:
    """Execute distance-based hierarchical clustering on a graph file."""
    from graphclust.api.facade import build_hierarchy
    from graphclust.core.models import HierarchicalOptions
    from graphclust.graph.loader import load_graph

    graph = load_graph(args.graph)
    options = HierarchicalOptions(linkage=args.linkage or settings.hierarchical_linkage)
    result = build_hierarchy(
        graph, method="distance", options=options,
        max_nodes=settings.hierarchical_max_nodes,
    )
    _print_json(_hierarchy_payload(result, args))
    return 0


def _cmd_modularity(args: argparse.Namespace, settings: Settings) -> int:
    """Execute modularity-driven hierarchical clustering on a graph file."""
    from graphclust.api.facade import build_hierarchy
    from graphclust.graph.loader import load_graph

    graph = load_graph(args.graph)
    result = build_hierarchy(
        graph, method="modularity", max_nodes=settings.hierarchical_max_nodes,
    )
    _print_json(_hierarchy_payload(result, args))
    return 0


def _hierarchy_payload(result: Any, args: argparse.Namespace) -> dict[str, Any]:
    """Dendrogram summary plus the requested partition(s)."""
    from graphclust.api.facade import cut_hierarchy
    from graphclust.clustering.export import dendrogram_to_records, partition_to_lists

    if args.k is not None:
        clusters: Any = partition_to_lists(cut_hierarchy(result, k=args.k))
    elif args.height is not None:
        clusters = partition_to_lists(cut_hierarchy(result, height=args.height))
    else:
        clusters = {
            str(height): partition_to_lists(partition)
            for height, partition in result.clusters.items()
        }

    return {
        "root_height": result.root.height,
        "dendrogram_size": len(result.dendrogram),
        "clusters": clusters,
        "tree": dendrogram_to_records(result),
    }


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _setup_logging(verbose: bool, settings: Settings) -> None:
    """Configure logging for CLI usage. Logs go to stderr, results to stdout."""
    from graphclust.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
