"""Unit tests for the index-aligned Euclidean comparison."""
import math

import numpy as np
import pytest

from trajectory_metrics import euclidean_align
from trajectory_metrics.exceptions import DimensionMismatchError, EmptyInputError


def test_reference_pair(soll_trajectory, ist_trajectory):
    result = euclidean_align(soll_trajectory, ist_trajectory)
    np.testing.assert_allclose(result.distances, [0.0, 1.0, 0.0])
    assert result.min_distance == 0.0
    assert result.max_distance == 1.0
    assert result.average_distance == pytest.approx(1.0 / 3.0)
    assert result.standard_deviation == pytest.approx(math.sqrt(2.0) / 3.0)
    assert result.metric == "euclidean"


def test_no_path_or_cost_matrix(soll_points, ist_points):
    result = euclidean_align(soll_points, ist_points)
    assert result.path is None
    assert result.accumulated_cost is None
    np.testing.assert_array_equal(result.aligned_ist, ist_points)


def test_trailing_samples_are_ignored():
    soll = [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 0.0), (4.0, 0.0)]
    ist = [(0.0, 0.5), (1.0, 0.5), (2.0, 0.5)]
    result = euclidean_align(soll, ist)
    assert len(result.distances) == 3
    assert result.average_distance == pytest.approx(0.5)
    assert len(euclidean_align(ist, soll).distances) == 3


def test_identity(helix):
    result = euclidean_align(helix, helix)
    assert result.max_distance == 0.0
    assert result.average_distance == 0.0


def test_errors():
    with pytest.raises(EmptyInputError):
        euclidean_align([], [(0.0, 0.0)])
    with pytest.raises(EmptyInputError):
        euclidean_align([(0.0, 0.0)], [])
    with pytest.raises(DimensionMismatchError):
        euclidean_align([(0.0, 0.0)], [(0.0, 0.0, 0.0)])
