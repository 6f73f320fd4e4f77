# src/core/models.py - v2
"""Shared graph type aliases and Pydantic option models.

No module redefines these types. All imports come from core.models.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# === GRAPH ===

NodeId = Hashable
# node -> neighbor -> non-negative weight. Callers own symmetry.
Graph = Mapping[NodeId, Mapping[NodeId, float]]

LinkageMethod = Literal["single", "complete", "average", "ward"]
PropagationMode = Literal["sync", "async", "semi"]
HierarchyMethod = Literal["distance", "modularity"]

LINKAGE_METHODS: tuple[str, ...] = ("single", "complete", "average", "ward")


# === OPTIONS ===


class LabelPropagationOptions(BaseModel):
    """Options recognized by the label propagation engines."""

    model_config = ConfigDict(frozen=True)

    max_iterations: int = Field(default=100, ge=1, le=500)
    random_seed: int = 42


class HierarchicalOptions(BaseModel):
    """Options recognized by the agglomerative clusterer."""

    model_config = ConfigDict(frozen=True)

    linkage: LinkageMethod = "single"
