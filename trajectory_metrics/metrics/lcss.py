# trajectory_metrics/metrics/lcss.py
"""
Longest Common Subsequence similarity (LCSS) between two trajectories.
"""
import logging
import math
from typing import Optional

import numpy as np

from ..constants import DEFAULT_LCSS_THRESHOLD, METRIC_LCSS
from ..distance import check_dimensions, paired_distances, row_distances
from ..exceptions import InvalidThresholdError
from ..results import MetricResult, assemble_result
from ..trajectory import PointSequence, as_points_array
from .dtw import validate_window

logger = logging.getLogger(__name__)


def validate_threshold(threshold) -> float:
    """Return ``threshold`` as float, raising InvalidThresholdError unless it is > 0."""
    try:
        value = float(threshold)
    except (TypeError, ValueError) as e:
        raise InvalidThresholdError(
            f"LCSS threshold must be a positive number, got {threshold!r}.", metric=METRIC_LCSS
        ) from e
    if math.isnan(value) or value <= 0:
        raise InvalidThresholdError(
            f"LCSS threshold must be a positive number, got {threshold!r}.", metric=METRIC_LCSS
        )
    return value


def lcss(
    soll: PointSequence,
    ist: PointSequence,
    threshold: float = DEFAULT_LCSS_THRESHOLD,
    window: Optional[int] = None,
) -> MetricResult:
    """
    LCSS score and matched pairs of two trajectories.

    A pair (i, j) matches when ``distance(soll[i], ist[j]) <= threshold``
    (and, with a temporal ``window``, ``|i - j| <= window``). The score is the
    length of the longest common subsequence divided by ``min(n, m)``.

    Runs in O(n * m) time and memory (a temporal ``window`` removes matches
    but does not shrink the grid).

    Args:
        soll: Planned trajectory.
        ist: Measured trajectory.
        threshold: Matching distance, must be > 0.
        window: Optional temporal constraint in samples.

    Returns:
        MetricResult whose path lists the matched pairs and whose distances
        are the pointwise distances at those pairs. Without any match the
        score is 0.0 and the statistics are NaN.

    Raises:
        EmptyInputError: If either sequence is empty.
        DimensionMismatchError: If the sequences differ in dimensionality.
        InvalidThresholdError: If ``threshold`` is not > 0.
        InvalidWindowError: If ``window`` is not a positive integer.
    """
    threshold = validate_threshold(threshold)
    window = validate_window(window, metric=METRIC_LCSS)
    soll_arr = as_points_array(soll)
    ist_arr = as_points_array(ist)
    check_dimensions(soll_arr, ist_arr, metric=METRIC_LCSS)

    n, m = len(soll_arr), len(ist_arr)
    matches = np.zeros((n, m), dtype=bool)
    for i in range(n):
        matches[i] = row_distances(soll_arr[i], ist_arr) <= threshold
    if window is not None:
        rows, cols = np.indices((n, m))
        matches &= np.abs(rows - cols) <= window

    length = np.zeros((n + 1, m + 1), dtype=int)
    for i in range(1, n + 1):
        for j in range(1, m + 1):
            if matches[i - 1, j - 1]:
                length[i, j] = length[i - 1, j - 1] + 1
            else:
                length[i, j] = max(length[i - 1, j], length[i, j - 1])

    path = []
    i, j = n, m
    while i > 0 and j > 0:
        if matches[i - 1, j - 1]:
            path.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif length[i - 1, j] >= length[i, j - 1]:
            i -= 1
        else:
            j -= 1
    path.reverse()

    score = min(1.0, max(0.0, length[n, m] / min(n, m)))
    dimension = soll_arr.shape[1]
    aligned_soll = soll_arr[[p[0] for p in path]] if path else np.empty((0, dimension))
    aligned_ist = ist_arr[[p[1] for p in path]] if path else np.empty((0, dimension))

    logger.debug(
        f"lcss: {n}x{m} grid, threshold={threshold}, window={window}, "
        f"matched={len(path)}, score={score:.4f}"
    )
    return assemble_result(
        METRIC_LCSS,
        paired_distances(aligned_soll, aligned_ist),
        path=path,
        accumulated_cost=length[1:, 1:].astype(float),
        aligned_soll=aligned_soll,
        aligned_ist=aligned_ist,
        score=float(score),
        threshold=threshold,
        window=window,
        allow_empty=True,
    )
