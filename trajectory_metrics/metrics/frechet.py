# trajectory_metrics/metrics/frechet.py
"""
Discrete Frechet distance between a soll and an ist trajectory.
"""
import logging

import numpy as np

from ..constants import METRIC_DFD
from ..distance import check_dimensions, paired_distances, row_distances
from ..results import MetricResult, assemble_result
from ..trajectory import PointSequence, as_points_array
from .dtw import reconstruct_path

logger = logging.getLogger(__name__)


def discrete_frechet(soll: PointSequence, ist: PointSequence) -> MetricResult:
    """
    Minimax coupling distance between two point sequences.

    ``cost(i, j) = max(d(soll[i-1], ist[j-1]), min(cost(i-1, j), cost(i, j-1), cost(i-1, j-1)))``
    with ``cost(0, 0) = 0`` and infinite borders, so that ``cost(1, 1)``
    equals the distance between the first samples.

    The coupling is reconstructed with the same tie-break as DTW. The
    result's ``max_distance`` is the Frechet distance ``cost(n, m)``; the
    other statistics are taken over the coupling's pointwise distances.

    Runs in O(n * m) time and memory; the recurrence is filled cell by cell,
    so recordings of several thousand samples each take seconds.

    Raises:
        EmptyInputError: If either sequence is empty.
        DimensionMismatchError: If the sequences differ in dimensionality.
    """
    soll_arr = as_points_array(soll)
    ist_arr = as_points_array(ist)
    check_dimensions(soll_arr, ist_arr, metric=METRIC_DFD)

    n, m = len(soll_arr), len(ist_arr)
    cost = np.full((n + 1, m + 1), np.inf)
    cost[0, 0] = 0.0
    for i in range(1, n + 1):
        row = row_distances(soll_arr[i - 1], ist_arr)
        for j in range(1, m + 1):
            cost[i, j] = max(
                row[j - 1], min(cost[i - 1, j], cost[i, j - 1], cost[i - 1, j - 1])
            )

    path = reconstruct_path(cost)
    aligned_soll = soll_arr[[p[0] for p in path]]
    aligned_ist = ist_arr[[p[1] for p in path]]
    frechet_distance = float(cost[n, m])

    logger.debug(f"dfd: {n}x{m} grid, distance={frechet_distance:.6g}")
    return assemble_result(
        METRIC_DFD,
        paired_distances(aligned_soll, aligned_ist),
        path=path,
        accumulated_cost=cost[1:, 1:],
        aligned_soll=aligned_soll,
        aligned_ist=aligned_ist,
        max_distance=frechet_distance,
    )
