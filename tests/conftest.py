# tests/conftest.py - v2
"""Shared test fixtures for all unit and integration tests.

Provides small hand-checked graphs as plain adjacency mappings.
No I/O beyond pytest's tmp_path.
"""

from __future__ import annotations

import pytest

from graphclust.graph.converters import from_edge_list
from graphclust.logging.context import clear_context


# === FIXTURES: Sample graphs ===


@pytest.fixture
def chain_graph() -> dict:
    """Path a-b-c-d with unit weights."""
    return {
        "a": {"b": 1},
        "b": {"a": 1, "c": 1},
        "c": {"b": 1, "d": 1},
        "d": {"c": 1},
    }


@pytest.fixture
def two_triangles() -> dict:
    """Two disjoint triangles {a,b,c} and {d,e,f}."""
    return from_edge_list([
        ("a", "b"), ("a", "c"), ("b", "c"),
        ("d", "e"), ("d", "f"), ("e", "f"),
    ])


@pytest.fixture
def bridged_triangles() -> dict:
    """Triangles {a,b,c} and {d,e,f} joined by the bridge c-d."""
    return from_edge_list([
        ("a", "b"), ("a", "c"), ("b", "c"),
        ("c", "d"),
        ("d", "e"), ("d", "f"), ("e", "f"),
    ])


@pytest.fixture
def clique4() -> dict:
    """Complete graph on a, b, c, d."""
    return from_edge_list([
        ("a", "b"), ("a", "c"), ("a", "d"),
        ("b", "c"), ("b", "d"), ("c", "d"),
    ])


@pytest.fixture
def two_pairs() -> dict:
    """Disconnected components {a,b} and {c,d}."""
    return {
        "a": {"b": 1},
        "b": {"a": 1},
        "c": {"d": 1},
        "d": {"c": 1},
    }


# === FIXTURES: Isolation ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
