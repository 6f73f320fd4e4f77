# tests/unit/core/test_unit_models.py - v2
"""Tests for core/models.py - option models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from graphclust.core.models import (
    LINKAGE_METHODS,
    HierarchicalOptions,
    LabelPropagationOptions,
)


class TestLabelPropagationOptions:
    def test_defaults(self):
        opts = LabelPropagationOptions()
        assert opts.max_iterations == 100
        assert opts.random_seed == 42

    @pytest.mark.parametrize("value", [1, 250, 500])
    def test_accepts_bounds(self, value):
        assert LabelPropagationOptions(max_iterations=value).max_iterations == value

    @pytest.mark.parametrize("value", [0, -3, 501])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(ValidationError):
            LabelPropagationOptions(max_iterations=value)

    def test_negative_seed_allowed(self):
        assert LabelPropagationOptions(random_seed=-8).random_seed == -8

    def test_frozen(self):
        opts = LabelPropagationOptions()
        with pytest.raises(ValidationError):
            opts.max_iterations = 5


class TestHierarchicalOptions:
    def test_default_linkage(self):
        assert HierarchicalOptions().linkage == "single"

    @pytest.mark.parametrize("linkage", LINKAGE_METHODS)
    def test_known_linkages(self, linkage):
        assert HierarchicalOptions(linkage=linkage).linkage == linkage

    def test_unknown_linkage(self):
        with pytest.raises(ValidationError):
            HierarchicalOptions(linkage="centroid")
