# trajectory_metrics/metrics/dtw.py
"""
Dynamic Time Warping between a soll and an ist trajectory.

One engine serves both the general DTW and the banded "Johnen" variant:
the latter only admits cells close to the length-scaled diagonal, which
bounds the work and keeps the alignment from drifting when both
recordings were sampled at matched nominal rates.
"""
import logging
import math
from typing import Optional, Tuple

import numpy as np

from ..constants import DEFAULT_JOHNEN_WINDOW, METRIC_DTW, METRIC_DTW_JOHNEN
from ..distance import check_dimensions, paired_distances, row_distances
from ..exceptions import InvalidWindowError
from ..results import AlignmentPath, MetricResult, assemble_result
from ..trajectory import PointSequence, as_points_array

logger = logging.getLogger(__name__)

_BAND_TOLERANCE = 1e-9


def validate_window(window, metric: str = METRIC_DTW) -> Optional[int]:
    """
    Check a band/temporal window and return it as int (or None if unconstrained).

    Raises:
        InvalidWindowError: If the window is not a positive integer.
    """
    if window is None:
        return None
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)):
        raise InvalidWindowError(
            f"Window must be a positive integer, got {window!r}.", metric=metric
        )
    if window < 1:
        raise InvalidWindowError(
            f"Window must be a positive integer, got {window}.", metric=metric
        )
    return int(window)


def band_bounds(i: int, n: int, m: int, window: Optional[int]) -> Tuple[int, int]:
    """
    Admissible column range [lo, hi] of cost-matrix row ``i`` (1-based).

    A cell (i, j) is admissible when ``|i*m/n - j| <= w`` where ``w`` is the
    window widened to ``|m/n - 1|`` so that (1, 1) and (n, m) always lie
    inside the band.
    """
    if window is None:
        return 1, m
    ratio = m / n
    width = max(float(window), abs(ratio - 1.0))
    center = i * ratio
    lo = max(1, math.ceil(center - width - _BAND_TOLERANCE))
    hi = min(m, math.floor(center + width + _BAND_TOLERANCE))
    return lo, hi


def reconstruct_path(cost: np.ndarray) -> AlignmentPath:
    """
    Walk back from (n, m) to (1, 1) through an (n+1 x m+1) cost matrix.

    Each step moves to the cheapest predecessor; ties prefer the diagonal,
    then the vertical, then the horizontal move. The returned path holds
    0-based sample index pairs running from (0, 0) to (n-1, m-1).
    """
    i, j = cost.shape[0] - 1, cost.shape[1] - 1
    path = [(i - 1, j - 1)]
    while i > 1 or j > 1:
        candidates = ((i - 1, j - 1), (i - 1, j), (i, j - 1))
        step = int(np.argmin([cost[c] for c in candidates]))
        i, j = candidates[step]
        path.append((i - 1, j - 1))
    path.reverse()
    return path


def _dtw(metric: str, soll: PointSequence, ist: PointSequence, window) -> MetricResult:
    window = validate_window(window, metric=metric)
    soll_arr = as_points_array(soll)
    ist_arr = as_points_array(ist)
    check_dimensions(soll_arr, ist_arr, metric=metric)

    n, m = len(soll_arr), len(ist_arr)
    band = window
    if band is not None and band >= max(n, m):
        logger.debug(f"{metric}: window {band} covers the whole {n}x{m} grid, running unconstrained.")
        band = None

    cost = np.full((n + 1, m + 1), np.inf)
    cost[0, 0] = 0.0
    for i in range(1, n + 1):
        lo, hi = band_bounds(i, n, m, band)
        row = row_distances(soll_arr[i - 1], ist_arr[lo - 1:hi])
        for k, j in enumerate(range(lo, hi + 1)):
            cost[i, j] = row[k] + min(cost[i - 1, j - 1], cost[i - 1, j], cost[i, j - 1])

    path = reconstruct_path(cost)
    soll_idx = [p[0] for p in path]
    ist_idx = [p[1] for p in path]
    aligned_soll = soll_arr[soll_idx]
    aligned_ist = ist_arr[ist_idx]

    logger.debug(
        f"{metric}: {n}x{m} grid, window={window}, cost={cost[n, m]:.6g}, path length={len(path)}"
    )
    return assemble_result(
        metric,
        paired_distances(aligned_soll, aligned_ist),
        path=path,
        accumulated_cost=cost[1:, 1:],
        aligned_soll=aligned_soll,
        aligned_ist=aligned_ist,
        window=window,
    )


def dtw(soll: PointSequence, ist: PointSequence, window: Optional[int] = None) -> MetricResult:
    """
    Dynamic Time Warping alignment of ``ist`` onto ``soll``.

    Time is O(n * m) unconstrained and O(n * window) inside a band; the
    (n x m) cost matrix is always allocated.

    Args:
        soll: Planned trajectory.
        ist: Measured trajectory.
        window: Optional band half-width in samples around the scaled
                diagonal. None, or a window at least as long as the longer
                sequence, runs unconstrained.

    Returns:
        MetricResult with the warping path, the (n x m) accumulated cost
        matrix and statistics over the pointwise distances along the path.

    Raises:
        EmptyInputError: If either sequence is empty.
        DimensionMismatchError: If the sequences differ in dimensionality.
        InvalidWindowError: If ``window`` is not a positive integer.
    """
    return _dtw(METRIC_DTW, soll, ist, window)


def dtw_johnen(
    soll: PointSequence, ist: PointSequence, window: Optional[int] = DEFAULT_JOHNEN_WINDOW
) -> MetricResult:
    """Banded DTW ("Johnen" variant); see :func:`dtw` for arguments and errors."""
    return _dtw(METRIC_DTW_JOHNEN, soll, ist, window)
