"""Unit tests for the DTW engine and its banded ("Johnen") variant.

These tests verify the accumulated-cost recurrence, the path
reconstruction and its tie-break, and the band constraint of the
windowed variant.
"""
import numpy as np
import pytest

from trajectory_metrics import dtw, dtw_johnen
from trajectory_metrics.constants import DEFAULT_JOHNEN_WINDOW
from trajectory_metrics.exceptions import (
    DimensionMismatchError,
    EmptyInputError,
    InvalidWindowError,
)
from trajectory_metrics.metrics.dtw import band_bounds


def _assert_valid_path(path, n, m):
    assert path[0] == (0, 0)
    assert path[-1] == (n - 1, m - 1)
    for (i0, j0), (i1, j1) in zip(path, path[1:]):
        assert (i1 - i0, j1 - j0) in {(1, 0), (0, 1), (1, 1)}


class TestDTW:

    def test_reference_pair(self, soll_trajectory, ist_trajectory):
        result = dtw(soll_trajectory, ist_trajectory)
        assert result.path == [(0, 0), (1, 1), (2, 2)]
        # the diagonal absorbs the single off-axis sample
        assert result.accumulated_cost[2, 2] == pytest.approx(1.0)
        np.testing.assert_allclose(result.distances, [0.0, 1.0, 0.0])
        assert result.average_distance == pytest.approx(1.0 / 3.0)
        assert result.max_distance == 1.0
        assert result.metric == "dtw"
        assert result.window is None

    def test_accumulated_cost_shape(self, helix, measured_helix):
        result = dtw(helix, measured_helix)
        assert result.accumulated_cost.shape == (40, 55)

    def test_path_runs_corner_to_corner(self, helix, measured_helix):
        result = dtw(helix, measured_helix)
        _assert_valid_path(result.path, 40, 55)
        assert len(result.distances) == len(result.path)
        assert result.aligned_soll.shape == (len(result.path), 3)

    def test_cost_is_non_decreasing_along_path(self, helix, measured_helix):
        result = dtw(helix, measured_helix)
        costs = [result.accumulated_cost[i, j] for i, j in result.path]
        assert all(b >= a for a, b in zip(costs, costs[1:]))
        assert costs[-1] == pytest.approx(float(np.sum(result.distances)))

    def test_average_is_mean_of_path_distances(self, helix, measured_helix):
        result = dtw(helix, measured_helix)
        assert result.average_distance == pytest.approx(float(np.mean(result.distances)))

    def test_identity_is_diagonal(self, helix):
        result = dtw(helix, helix)
        assert result.path == [(i, i) for i in range(len(helix))]
        assert result.max_distance == 0.0
        assert result.average_distance == 0.0

    def test_ties_prefer_diagonal(self):
        # every cell costs nothing, so only the tie-break decides the path
        result = dtw([(0.0,), (0.0,), (0.0,)], [(0.0,), (0.0,)])
        assert result.path == [(0, 0), (1, 0), (2, 1)]
        square = dtw([(0.0,), (0.0,)], [(0.0,), (0.0,)])
        assert square.path == [(0, 0), (1, 1)]

    def test_warps_repeated_samples(self):
        soll = [(0.0,), (1.0,), (2.0,), (3.0,)]
        ist = [(0.0,), (1.0,), (1.0,), (1.0,), (2.0,), (3.0,)]
        result = dtw(soll, ist)
        assert result.accumulated_cost[-1, -1] == 0.0
        assert result.path == [(0, 0), (1, 1), (1, 2), (1, 3), (2, 4), (3, 5)]

    def test_single_sample_sequences(self):
        result = dtw([(1.0, 1.0)], [(0.0, 0.0), (2.0, 2.0)])
        assert result.path == [(0, 0), (0, 1)]

    def test_errors(self):
        with pytest.raises(EmptyInputError):
            dtw([], [(0.0, 0.0)])
        with pytest.raises(EmptyInputError):
            dtw([(0.0, 0.0)], [])
        with pytest.raises(DimensionMismatchError):
            dtw([(0.0, 0.0)], [(0.0, 0.0, 0.0)])


class TestWindowedDTW:

    def test_unbounded_window_matches_unconstrained(self, helix, measured_helix):
        free = dtw(helix, measured_helix)
        banded = dtw(helix, measured_helix, window=1000)
        assert banded.path == free.path
        np.testing.assert_allclose(banded.accumulated_cost, free.accumulated_cost)
        np.testing.assert_allclose(banded.distances, free.distances)

    def test_path_stays_inside_band(self, helix, measured_helix):
        n, m = len(helix), len(measured_helix)
        result = dtw_johnen(helix, measured_helix, window=2)
        _assert_valid_path(result.path, n, m)
        for i, j in result.path:
            lo, hi = band_bounds(i + 1, n, m, 2)
            assert lo <= j + 1 <= hi

    def test_cells_outside_band_are_infinite(self, helix, measured_helix):
        n, m = len(helix), len(measured_helix)
        cost = dtw_johnen(helix, measured_helix, window=2).accumulated_cost
        lo, hi = band_bounds(n, n, m, 2)
        assert np.isinf(cost[n - 1, : lo - 1]).all()
        assert np.isfinite(cost[n - 1, lo - 1: hi]).all()

    def test_band_never_beats_unconstrained_cost(self, helix, measured_helix):
        free = dtw(helix, measured_helix).accumulated_cost[-1, -1]
        banded = dtw_johnen(helix, measured_helix, window=1).accumulated_cost[-1, -1]
        assert banded >= free - 1e-9

    def test_band_always_contains_corners(self):
        for n, m in [(3, 30), (30, 3), (7, 7), (1, 5)]:
            assert band_bounds(1, n, m, 1)[0] == 1
            assert band_bounds(n, n, m, 1)[1] == m

    def test_very_different_lengths_still_align(self):
        soll = [(float(i), 0.0) for i in range(3)]
        ist = [(i / 10.0, 0.0) for i in range(21)]
        result = dtw_johnen(soll, ist, window=1)
        _assert_valid_path(result.path, 3, 21)
        assert np.isfinite(result.accumulated_cost[-1, -1])

    def test_johnen_defaults(self, soll_points, ist_points):
        result = dtw_johnen(soll_points, ist_points)
        assert result.metric == "dtw_johnen"
        assert result.window == DEFAULT_JOHNEN_WINDOW
        assert result.path == [(0, 0), (1, 1), (2, 2)]

    @pytest.mark.parametrize("window", [0, -3, 2.5, "4", True])
    def test_invalid_window(self, window, soll_points, ist_points):
        with pytest.raises(InvalidWindowError):
            dtw(soll_points, ist_points, window=window)
        with pytest.raises(InvalidWindowError):
            dtw_johnen(soll_points, ist_points, window=window)
