# src/__init__.py - v1
"""graphclust: graph community detection and hierarchical clustering.

Label propagation (sync, async, semi-supervised), agglomerative
clustering over hop distances and greedy modularity clustering, with
dendrogram cutting and export helpers.
"""

from graphclust.version import __version__

__all__ = ["__version__"]
