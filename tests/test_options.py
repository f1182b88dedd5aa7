"""Tests for option parsing and validation."""

from __future__ import annotations

import pytest

from clusterizer.errors import InvalidOptions
from clusterizer.options import QuantizeOptions


def test_request_spelling_is_accepted():
    opts = QuantizeOptions.from_mapping(
        {"xStep": 2, "yStep": 3, "clusterQuantity": 4, "maxIterations": 9, "tolerance": 0}
    )
    assert (opts.x_step, opts.y_step) == (2, 3)
    assert opts.cluster_quantity == 4
    assert opts.max_iterations == 9
    assert opts.tolerance == 0.0


def test_step_aliases():
    opts = QuantizeOptions.from_mapping({"horizontalStep": 5, "verticalStep": 6})
    assert (opts.x_step, opts.y_step) == (5, 6)


def test_unset_and_unknown_keys():
    base = QuantizeOptions(cluster_quantity=3)
    opts = QuantizeOptions.from_mapping({"tolerance": None, "colour": "red"}, base=base)
    assert opts == base


def test_integral_floats_are_accepted():
    opts = QuantizeOptions.from_mapping({"clusterQuantity": 3.0})
    assert opts.cluster_quantity == 3
    assert isinstance(opts.cluster_quantity, int)


@pytest.mark.parametrize(
    "mapping",
    [
        {"x_step": 0},
        {"y_step": -1},
        {"cluster_quantity": 1.5},
        {"cluster_quantity": True},
        {"max_iterations": "10"},
        {"tolerance": -0.1},
        {"tolerance": float("nan")},
        {"initialization_method": "farthest"},
        {"seed": "abc"},
    ],
)
def test_invalid_values(mapping):
    with pytest.raises(InvalidOptions):
        QuantizeOptions.from_mapping(mapping)


def test_invalid_options_is_a_value_error():
    with pytest.raises(ValueError):
        QuantizeOptions(max_iterations=0)
